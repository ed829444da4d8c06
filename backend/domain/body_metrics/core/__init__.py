"""Core building blocks of the body metrics domain."""
