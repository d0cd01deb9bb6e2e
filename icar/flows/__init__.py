"""Multi-step user flows built on top of the API wrappers."""
