"""User persistence and auth delivery adapters."""
