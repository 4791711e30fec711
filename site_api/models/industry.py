# site_api/models/industry.py
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from site_api.db.base import Base, TimestampMixin, UpdatedTimestampMixin, UUIDMixin


class Industry(UUIDMixin, UpdatedTimestampMixin, Base):
    __tablename__ = "smb_industries"

    slug: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    tagline: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    icon_name: Mapped[str] = mapped_column(String(64), nullable=False, server_default="Briefcase")

    hero_headline: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    hero_subhead: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    hero_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    results_statement: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    related_industries: Mapped[List[str]] = mapped_column(
        ARRAY(String), nullable=False, server_default=text("'{}'")
    )

    metadata_title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    metadata_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    metadata_keywords: Mapped[List[str]] = mapped_column(
        ARRAY(String), nullable=False, server_default=text("'{}'")
    )

    display_order: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="true", index=True)

    pain_points: Mapped[List["PainPoint"]] = relationship(back_populates="industry", cascade="all, delete-orphan")
    use_cases: Mapped[List["UseCase"]] = relationship(back_populates="industry", cascade="all, delete-orphan")
    faqs: Mapped[List["FAQ"]] = relationship(back_populates="industry", cascade="all, delete-orphan")


class PainPoint(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "smb_pain_points"

    industry_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("smb_industries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")

    industry: Mapped[Industry] = relationship(back_populates="pain_points")


class UseCase(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "smb_use_cases"

    industry_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("smb_industries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    benefit: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    icon_name: Mapped[str] = mapped_column(String(64), nullable=False, server_default="Sparkles")
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")

    industry: Mapped[Industry] = relationship(back_populates="use_cases")


class FAQ(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "smb_faqs"

    industry_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("smb_industries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")

    industry: Mapped[Industry] = relationship(back_populates="faqs")
