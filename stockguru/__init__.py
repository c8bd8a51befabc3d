"""
StockGuru: Indian equities dashboard API with an AI market assistant.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - market: Quotes, history, technical indicators, indices, news, insights.
    - assistant: LLM gateway, query classification, intelligent chat.
    - accounts: Users, watchlists, price alerts, chat history.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (market data, news, LLMs, storage) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
