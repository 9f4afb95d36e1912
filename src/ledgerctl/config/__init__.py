"""Configuration — TOML section models, settings sources, and logging setup."""
