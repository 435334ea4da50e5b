"""Database Package — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - Single async engine per process (initialized via infrastructure.database.init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL: native async, no thread pool
"""
