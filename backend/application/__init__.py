"""Application layer - use cases orchestrating domain services."""
