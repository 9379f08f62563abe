"""Testing helpers – in-memory fakes for the store and key service."""
