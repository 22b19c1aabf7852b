"""Database column type helpers."""
from __future__ import annotations

from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.types import JSON

# JSONB on Postgres, plain JSON on SQLite and everything else.
JSONBCompat = JSON().with_variant(JSONB(), "postgresql")

GUID = UUID(as_uuid=True)
