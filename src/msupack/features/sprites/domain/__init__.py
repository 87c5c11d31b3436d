"""Sprite catalog models."""
