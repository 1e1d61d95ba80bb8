"""Database primitives: the declarative base shared by all ORM models."""
