"""Sprite file adapters."""
