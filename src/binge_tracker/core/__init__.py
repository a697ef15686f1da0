"""Core configuration and shared exceptions."""
