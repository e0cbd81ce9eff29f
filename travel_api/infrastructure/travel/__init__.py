"""
Infrastructure adapters for the travel bounded context.

Each adapter implements a domain port (ABC) and connects
to external systems: the relational database and notification channels.
"""
