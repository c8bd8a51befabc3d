"""
Application layer for the assistant bounded context.
"""
