"""Shared infrastructure: logging, errors, database."""
