"""Services Layer: use cases orchestrating repositories around the pure core.

Invariants:
    - One service per aggregate (auth, projects, profiles, messages)
    - Services receive the caller as an explicit Identity, never from request state
    - Tag reconciliation lives in its own module and is reused by project use cases
"""
