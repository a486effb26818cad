"""OrientLink backend: supplier communication brokering over a language model."""
