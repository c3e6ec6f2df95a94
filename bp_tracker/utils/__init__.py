"""Configuration, logging, timestamp and validation helpers."""
