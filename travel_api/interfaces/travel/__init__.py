"""
Travel order HTTP interface: routes, schemas and dependency wiring.
"""
