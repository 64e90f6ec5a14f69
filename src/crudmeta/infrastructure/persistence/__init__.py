"""Persistence of users, roles and permissions."""
