"""Kernel time helpers."""
from es_atompub.kernel.time.clock import Clock, FrozenClock, SystemClock, format_rfc3339

__all__ = ["Clock", "FrozenClock", "SystemClock", "format_rfc3339"]
