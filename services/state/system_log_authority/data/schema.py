"""SQLAlchemy table definitions owned by System Log Authority Service.

The table is created unqualified; sessions pin ``search_path`` to the
service schema and bootstrap maps it there explicitly.
"""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, MetaData, Table, Text

metadata = MetaData()

system_log_table = Table(
    "system_log_table",
    metadata,
    Column("log_id", Integer, primary_key=True, autoincrement=True),
    Column("timestamp", DateTime(timezone=False), nullable=False),
    Column("user_id", Integer, nullable=False),
    Column("action", Text, nullable=False),
    Column("details", Text, nullable=True),
)
