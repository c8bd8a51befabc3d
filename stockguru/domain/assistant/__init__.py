"""
Assistant bounded context: domain layer.

Rule-based query classification, canned assistant replies and the
language model port used by the chat assistant.
"""
