"""Core utilities: exceptions and time handling."""
