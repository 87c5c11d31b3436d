"""Apply domain models and errors."""
