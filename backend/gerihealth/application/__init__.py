"""
Application Layer

Scan pipeline and the services the API calls.
"""
