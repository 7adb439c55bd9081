"""DevSearch Application Package: developer profiles, projects, tags, reviews and inbox.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
