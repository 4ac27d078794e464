"""
Unit Tests

The analytics engine is pure computation, so every test runs in isolation
without services, files or network access.
"""
