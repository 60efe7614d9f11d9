"""Infrastructure layer - External dependencies and implementations.

This layer contains all external dependencies including:
- Database adapters (SQLAlchemy)
- API routes (FastAPI)
- Authentication (Argon2 password hashing, signed bearer tokens)
"""
