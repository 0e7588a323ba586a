"""Configuration layer — settings discovery, models and logging setup."""
