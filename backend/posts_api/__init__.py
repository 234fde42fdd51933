"""Posts API: CRUD HTTP service for posts and their comments.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
