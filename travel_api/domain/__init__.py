"""
Domain layer package.

Travel orders, actors and their scopes, the lifecycle state machine,
the authorization policy and the repository/notifier ports.
No framework imports, no IO, no side effects.
"""
