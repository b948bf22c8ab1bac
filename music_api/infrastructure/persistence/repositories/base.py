"""Base repository: generic CRUD and pagination over one ORM model."""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from music_api.application.dtos.pagination import Page, PageRequest
from music_api.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, exists_by_id, create, update, delete and paginate.

    Subclasses declare sortable_columns (API property name -> ORM column) so
    page requests can only sort on whitelisted columns.
    """

    sortable_columns: dict[str, InstrumentedAttribute[Any]] = {}

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return a single record by primary key, or None."""
        return await self.db.get(self.model, entity_id)

    async def exists_by_id(self, entity_id: int) -> bool:
        """Return True if a record with this primary key exists."""
        model: Any = self.model
        result = await self.db.execute(select(model.id).where(model.id == entity_id))
        return result.first() is not None

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record; server defaults (id, timestamps) are loaded back."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record and reload server-side values."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record (ORM cascades apply)."""
        await self.db.delete(obj)
        await self.db.flush()

    def _order_by(self, page_request: PageRequest) -> list[Any]:
        model: Any = self.model
        clauses = []
        for order in page_request.sort:
            column = self.sortable_columns[order.name]
            clauses.append(column.desc() if order.descending else column.asc())
        # Stable order across pages when sort values tie
        clauses.append(model.id.asc())
        return clauses

    async def paginate(
        self, stmt: Select[Any], page_request: PageRequest, *options: Any
    ) -> Page[ModelType]:
        """Run stmt for one page (sorted, offset/limit) and count the full result.

        Loader options (e.g. joinedload) apply to the page query only.
        Returns a Page of the entities produced by stmt.
        """
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = (await self.db.execute(count_stmt)).scalar_one()
        page_stmt = (
            stmt.options(*options)
            .order_by(*self._order_by(page_request))
            .offset(page_request.offset)
            .limit(page_request.size)
        )
        result = await self.db.execute(page_stmt)
        return Page.of(list(result.scalars().unique().all()), page_request, total)
