"""Configuration loading for the load engine."""
