"""SQLAlchemy table definitions for the job queue.

Uses SQLAlchemy Core (not ORM) for explicit control over queries
and compatibility with multiple database backends.
"""

from sqlalchemy import Column, DateTime, Index, MetaData, String, Table, Text

# Shared metadata for all tables
metadata = MetaData()

jobs_table = Table(
    "jobs",
    metadata,
    Column("job_id", String(64), primary_key=True),
    Column("name", String(64), nullable=False),
    Column("args_json", Text, nullable=False),
    Column("status", String(32), nullable=False),
    Column("enqueued_at", DateTime(timezone=True), nullable=False),
    Index("ix_jobs_enqueued_at", "enqueued_at"),
)
