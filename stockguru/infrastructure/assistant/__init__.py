"""
Infrastructure adapters for the assistant bounded context.

Language model providers, prompt templates and the adapters that
turn model output into domain objects.
"""
