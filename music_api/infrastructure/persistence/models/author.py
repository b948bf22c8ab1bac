"""Author ORM model. Owns its musics: deleting an author deletes them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from music_api.infrastructure.persistence.database import Base
from music_api.infrastructure.persistence.models.mixins import CatalogModel

if TYPE_CHECKING:
    from music_api.infrastructure.persistence.models.music import Music


class Author(CatalogModel, Base):
    """Music author. Table: authors. Email is globally unique."""

    __tablename__ = "authors"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    musics: Mapped[list[Music]] = relationship(
        back_populates="author",
        cascade="all, delete-orphan",
        order_by="Music.id",
    )
