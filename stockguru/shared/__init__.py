"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error handling and mapping
- Security middleware and password hashing
- Rate limiting
- Logging configuration
"""
