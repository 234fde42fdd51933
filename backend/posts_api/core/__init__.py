"""Core Layer: pure domain definitions, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, or db/
    - Error types and message strings live here so every layer shares them

Design Decisions:
    - Storage reached only through the PostStore protocol (ADR: dependency arrows point inward)
"""
