"""Domain layer: security entities, property metadata and access decisions."""
