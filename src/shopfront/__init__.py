"""Shopfront - storefront API with bearer-token authentication.

Argon2id password hashing, signed expiring bearer tokens, an in-memory
product catalog and per-user shopping carts.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
