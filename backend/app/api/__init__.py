"""API Layer: route table, dependencies, route handlers and error handlers.

Invariants:
    - Routes registered from one explicit table (no decorators, no auto-discovery)
    - All endpoints return structured JSON responses
    - Thin handlers delegate to services
"""
