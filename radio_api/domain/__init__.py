"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  token.py   — server-side stored vendor credentials (optional persistence variant)
  mixins.py  — shared TimestampMixin
"""

from radio_api.domain.token import StoredCredential

__all__ = [
    "StoredCredential",
]
