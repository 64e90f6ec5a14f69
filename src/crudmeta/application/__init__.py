"""Application layer - session-scoped services."""
