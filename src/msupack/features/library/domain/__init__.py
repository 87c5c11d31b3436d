"""Library domain models."""
