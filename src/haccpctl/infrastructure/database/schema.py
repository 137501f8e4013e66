"""SQLAlchemy Core table definitions for the haccpctl database.

Only snooze state is durable. Scores, summaries, and advice are
recomputed from collaborator input on every call.
"""

from __future__ import annotations

from sqlalchemy import Column, Integer, MetaData, Table, Text

metadata = MetaData()

step_snoozes = Table(
    "step_snoozes",
    metadata,
    Column("tenant", Text, primary_key=True),
    Column("step_key", Text, primary_key=True),
    Column("snooze_until", Text),  # ISO 8601, UTC
    Column("snooze_count", Integer, nullable=False, default=0, server_default="0"),
    Column("updated", Text, nullable=False),
)
