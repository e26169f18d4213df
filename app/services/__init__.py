"""
Services Layer

Business logic services. Core services handle the CRUD operations over the
forecast store, each call running in its own short-lived database session.
"""

__all__ = []
