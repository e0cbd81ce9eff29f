"""
Shared error handling package.

Maps travel domain and authentication errors to JSON HTTP responses
in one place, via ``register_error_handlers``.
"""
