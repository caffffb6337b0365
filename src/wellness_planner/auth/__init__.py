"""Session verification for the wellness API."""
