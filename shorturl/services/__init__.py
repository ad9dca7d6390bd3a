"""
Services module for business logic separation.

This module contains the registry backends and the service classes that
encapsulate business logic, keeping it separate from API endpoints.
"""
