"""
Application layer for the travel bounded context.

Use cases coordinate domain entities, the authorization policy and
ports to fulfill travel order operations. No framework or
infrastructure imports allowed.
"""
