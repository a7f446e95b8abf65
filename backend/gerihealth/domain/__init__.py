"""
Domain Layer

Entities, value objects, ports and exceptions. No infrastructure imports.
"""
