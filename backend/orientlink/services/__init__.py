"""Orchestration flows and lookup services."""
