"""Shared helpers: storage, validation, geo, tokens, errors and logging."""
