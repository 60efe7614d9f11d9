"""Domain layer - business entities and services with no framework dependencies."""
