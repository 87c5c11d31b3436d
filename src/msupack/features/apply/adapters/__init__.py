"""Adapters backing apply ports."""
