"""Configuration and logging for the Distance Matrix client."""
