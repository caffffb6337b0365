"""Core enums and error types shared across layers."""
