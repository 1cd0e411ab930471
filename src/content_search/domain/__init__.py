"""Domain layer - API value objects with no infrastructure dependencies."""
