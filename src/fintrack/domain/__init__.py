"""Domain layer: records and input validation."""
