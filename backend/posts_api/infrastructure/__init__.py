"""Infrastructure Layer: database access, storage implementation, logging.

Invariants:
    - Infrastructure implements core/ protocols; core never imports infrastructure
    - All SQLAlchemy failures mapped to DatabaseError before leaving this layer
"""
