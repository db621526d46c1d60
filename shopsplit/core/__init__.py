"""Configuration and persistence."""
