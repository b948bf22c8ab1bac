"""Infrastructure: persistence (SQLAlchemy) and cache (Redis / in-memory)."""
