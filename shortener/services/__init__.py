"""
Services module for business logic separation.

This module contains the code generator and the URL shortening service,
keeping business logic separate from API endpoints and storage.
"""
