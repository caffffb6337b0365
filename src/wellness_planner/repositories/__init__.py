"""Repository layer for data access."""
