"""Adapters – transport bindings."""
