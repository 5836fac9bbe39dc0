"""Command-line client for the sensor collector service."""
