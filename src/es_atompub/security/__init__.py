"""Security – response envelope encryption."""
