"""Persistence: async engine, session dependencies, ORM models and repositories."""
