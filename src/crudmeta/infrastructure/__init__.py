"""Infrastructure layer: persistence and password hashing."""
