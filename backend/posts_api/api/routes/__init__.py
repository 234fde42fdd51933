"""Route Modules: one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes contain request flow only; persistence lives behind PostStore

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
