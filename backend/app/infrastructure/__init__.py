"""Infrastructure Layer: database access, repositories, security and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Repositories return fully-loaded aggregates; callers never trigger lazy loads
"""
