"""Host framework adapters."""
