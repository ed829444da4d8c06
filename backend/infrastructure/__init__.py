"""Infrastructure layer - configuration loaded from the environment."""
