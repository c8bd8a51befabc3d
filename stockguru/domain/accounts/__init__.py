"""
Accounts bounded context: domain layer.

Users, watchlists, price/RSI alerts and chat history.
"""
