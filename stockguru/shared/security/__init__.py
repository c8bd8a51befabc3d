"""
Security package: response headers, rate limiting and password hashing.
"""
