"""Database engine, session and dependency helpers."""
