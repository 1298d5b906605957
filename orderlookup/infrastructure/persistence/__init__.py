"""Persistence: SQLAlchemy engine, ORM models and the SQL backend gateway."""
