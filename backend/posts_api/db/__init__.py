"""Database Infrastructure: SQLAlchemy declarative Base shared by all models.

Invariants:
    - Single async engine per process (initialized via infrastructure.database.init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite for local development and tests, asyncpg for PostgreSQL deployments
"""
