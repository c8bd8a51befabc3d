"""
Market bounded context: domain layer.

This module contains all domain logic for the market context:
- Technical indicator calculation
- Symbol formatting and extraction rules
- Quotes, price history, indices and news entities
"""
