"""Feature packages: library, apply and sprites."""
