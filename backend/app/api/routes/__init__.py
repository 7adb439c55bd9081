"""Route Handlers: one module per resource, plain async functions.

Invariants:
    - Handlers are registered by app/api/route_table.py, never by decorator
    - Routes never contain business logic (delegate to services)
"""
