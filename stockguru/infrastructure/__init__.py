"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer: market data and news providers,
language models and in-memory repositories.
"""
