"""Root conftest: keeps the top-level packages importable when running pytest from a checkout."""
