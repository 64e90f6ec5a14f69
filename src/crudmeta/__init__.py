"""crudmeta - metadata core for CRUD applications.

Resolves property paths of domain types into typed, constraint-aware
metadata and decides per-user access to types and fields.
"""

__version__ = "0.1.0"
