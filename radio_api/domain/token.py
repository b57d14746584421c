"""SQLAlchemy ORM model for vendor credentials persisted server-side."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from radio_api.db.base import Base
from radio_api.domain.mixins import TimestampMixin


class StoredCredential(Base, TimestampMixin):
    __tablename__ = "stored_credentials"

    # Login identity (email) the credential was issued to
    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)

    access_token: Mapped[str] = mapped_column(Text, nullable=False)
    refresh_token: Mapped[str] = mapped_column(Text, nullable=False, default="")
    token_type: Mapped[str] = mapped_column(String(50), nullable=False, default="Bearer")
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
