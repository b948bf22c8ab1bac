"""Music ORM model. References exactly one author by author_id."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from music_api.infrastructure.persistence.database import Base
from music_api.infrastructure.persistence.models.mixins import CatalogModel

if TYPE_CHECKING:
    from music_api.infrastructure.persistence.models.author import Author


class Music(CatalogModel, Base):
    """Music track. Table: musics. (name, author_id) is unique."""

    __tablename__ = "musics"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
    genre: Mapped[str | None] = mapped_column(String(100), nullable=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("authors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    author: Mapped[Author] = relationship(back_populates="musics")

    __table_args__ = (
        UniqueConstraint("name", "author_id", name="uq_music_name_author"),
        CheckConstraint("duration_seconds > 0", name="music_duration_positive_check"),
    )
