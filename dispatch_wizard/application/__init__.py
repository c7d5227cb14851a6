"""
Application layer package.

This package contains use cases, services, and interfaces that implement
the wizard's business logic.
"""
