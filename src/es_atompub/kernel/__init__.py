"""Kernel – error hierarchy and small value types shared by every layer."""
