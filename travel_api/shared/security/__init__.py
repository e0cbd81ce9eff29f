"""
Security package: secure headers, rate limiting and bearer authentication.
"""
