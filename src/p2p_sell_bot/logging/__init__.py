"""Logging configuration (structlog + optional Logfire)."""
