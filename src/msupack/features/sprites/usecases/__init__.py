"""Sprite catalog use cases."""
