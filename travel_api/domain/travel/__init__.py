"""
Travel bounded context: domain layer.

This module contains all domain logic for the travel context:
- Travel order entities and lifecycle rules
- Scope-based authorization policy
- Lifecycle notification rendering
"""
