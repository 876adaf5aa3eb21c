"""Core utilities shared by the API, services and CLI."""
