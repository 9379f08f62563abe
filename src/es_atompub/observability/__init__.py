"""Observability – logging, correlation context and health checks."""
