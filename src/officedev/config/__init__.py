"""Configuration: fleet models, file discovery, settings and logging."""
