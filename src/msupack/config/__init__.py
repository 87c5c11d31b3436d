"""Configuration package: path discovery, TOML config and derived settings."""
