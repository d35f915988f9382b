"""
Domain package - enums, ORM models, pydantic schemas and the entity registry.
"""
