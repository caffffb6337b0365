"""Database engine, session factory and models."""
