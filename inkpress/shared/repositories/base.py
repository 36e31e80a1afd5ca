"""
Base Repository

This module provides a generic base repository with common CRUD operations.
All entity-specific repositories inherit from this class.

What This Provides:
===================
- get(id)          → Fetch single record by integer id
- exists()         → Check if record exists
- create()         → Create new record
- update()         → Update existing record
- delete()         → Hard delete record
- dialect_insert() → INSERT construct supporting ON CONFLICT for the bound dialect

Generic Type Pattern:
=====================
    class PostRepository(BaseRepository[Post]):
        pass

    repo = PostRepository(db)
    post = await repo.get(42)  # Returns Post, not Any!

flush() vs commit():
====================
- flush(): Sends SQL to database but doesn't commit transaction
  - Changes are visible within the same session
  - Rolled back if a later step of the same operation fails

- commit(): Permanently saves all changes
  - Done once per lifecycle operation by unit_of_work()
  - Repository methods only ever flush

Identity Map:
=============
Several repositories write with bulk UPDATE/DELETE statements (counts,
metadata, relationships). Reads that return ORM objects therefore ask for
populate_existing so an object already in the session is refreshed rather
than served stale.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from inkpress.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., Post, TermTaxonomy)
            session: Async database session
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: int) -> Optional[ModelType]:
        """
        Get a single record by its id.

        Args:
            record_id: The id of the record to fetch

        Returns:
            The model instance if found, None otherwise

        SQL Generated:
            SELECT * FROM posts WHERE id = 42
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == record_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def exists(self, record_id: int) -> bool:
        """
        Check if a record exists without loading it.

        Args:
            record_id: The id to check

        Returns:
            True if record exists, False otherwise
        """
        result = await self.session.execute(
            select(sql_count()).select_from(self.model).where(self.model.id == record_id)
        )
        return (result.scalar() or 0) > 0

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance to the session and flushes to get the generated id.

        Args:
            **kwargs: Field values for the new record

        Returns:
            The created model instance with all DB-generated values
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    def dialect_insert(self, model: Optional[Type[Base]] = None) -> Any:
        """
        Build an INSERT for the session's dialect.

        Both the PostgreSQL and SQLite constructs expose
        on_conflict_do_update / on_conflict_do_nothing with the same
        signature, which is all the upsert paths need.

        Args:
            model: Model to insert into (defaults to this repository's model)

        Returns:
            Dialect-specific Insert construct
        """
        target = model if model is not None else self.model
        dialect = self.session.get_bind().dialect.name
        if dialect == "sqlite":
            return sqlite.insert(target)
        return postgresql.insert(target)

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def update(
        self,
        record_id: int,
        **kwargs: Any,
    ) -> Optional[ModelType]:
        """
        Update a record by id.

        Only the given fields are written; passing a field with value None
        writes NULL (callers decide what "omitted" means).

        Args:
            record_id: id of the record to update
            **kwargs: Fields to update

        Returns:
            Updated model instance, or None if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return None

        for field, value in kwargs.items():
            if hasattr(instance, field):
                setattr(instance, field, value)

        await self.session.flush()
        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete(self, record_id: int) -> bool:
        """
        Hard delete a record by id.

        Args:
            record_id: id of the record to delete

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get(record_id)
        if not instance:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True
