"""Application layer for body metrics."""
