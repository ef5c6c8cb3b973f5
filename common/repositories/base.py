from contextlib import asynccontextmanager
from typing import Generic, TypeVar, Optional, List, Type, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from pydantic import BaseModel

from common.core.exceptions import StorageError
from common.core.otel_exporter import trace_span, get_logger
from common.db.scoped import get_session

logger = get_logger(__name__)

EntityType = TypeVar("EntityType")
DomainModelType = TypeVar("DomainModelType")
CreateModelType = TypeVar("CreateModelType", bound=BaseModel)
UpdateModelType = TypeVar("UpdateModelType", bound=BaseModel)


class BaseRepository(Generic[EntityType, DomainModelType]):
    """
    Base repository with per-operation session management.

    Sessions are acquired per call and released immediately, or shared with
    an enclosing ``transaction()``. Pass ``db_session`` to pin every call to
    one session whose lifecycle the caller owns.

    Driver failures are re-raised as ``StorageError`` so callers never see
    SQLAlchemy exceptions.

    Example:
        repo = SubscriptionRepository()
        sub = await repo.get(123)  # Acquires and releases a session
    """

    def __init__(
        self,
        entity_class: Type[EntityType],
        domain_class: Type[DomainModelType],
        db_session: Optional[AsyncSession] = None,
    ):
        self.entity_class = entity_class
        self.domain_class = domain_class
        self._explicit_session = db_session

    @asynccontextmanager
    async def _get_session(
        self, readonly: bool = False
    ) -> AsyncGenerator[AsyncSession, None]:
        """
        Get a session for an operation, translating driver errors.

        Yields:
            The explicit session if one was given, else an operation-scoped one
        """
        try:
            if self._explicit_session is not None:
                yield self._explicit_session
            else:
                async with get_session(readonly=readonly) as session:
                    yield session
        except SQLAlchemyError as e:
            logger.error(f"{self.entity_class.__name__} storage operation failed: {e}")
            raise StorageError(
                f"{self.entity_class.__name__} storage operation failed"
            ) from e

    def _entity_to_domain(self, entity: EntityType) -> DomainModelType:
        """Convert database entity to domain model."""
        return self.domain_class.model_validate(entity)

    def _entities_to_domain(self, entities: List[EntityType]) -> List[DomainModelType]:
        """Convert list of database entities to domain models."""
        return [self._entity_to_domain(entity) for entity in entities]

    @trace_span
    async def get(self, id: int) -> Optional[DomainModelType]:
        query = select(self.entity_class).where(self.entity_class.id == id)

        async with self._get_session(readonly=True) as session:
            result = await session.execute(query)
            entity = result.scalar_one_or_none()
            return self._entity_to_domain(entity) if entity else None

    @trace_span
    async def create(self, create_model: CreateModelType) -> DomainModelType:
        """Create a new entity from a typed create model."""
        data = create_model.model_dump(exclude_none=True)
        db_obj = self.entity_class(**data)
        async with self._get_session() as session:
            session.add(db_obj)
            await session.flush()
            await session.refresh(db_obj)
            return self._entity_to_domain(db_obj)

    @trace_span
    async def update(
        self, id: int, update_model: UpdateModelType
    ) -> Optional[DomainModelType]:
        """
        Update an entity with a typed update model.

        Returns:
            The updated model, or None when no row has this id
        """
        data = update_model.model_dump()
        async with self._get_session() as session:
            result = await session.execute(
                update(self.entity_class).where(self.entity_class.id == id).values(data)
            )
            if result.rowcount == 0:
                return None
            await session.flush()
            entity = await session.get(self.entity_class, id, populate_existing=True)
            return self._entity_to_domain(entity)

    @trace_span
    async def delete(self, id: int) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                delete(self.entity_class).where(self.entity_class.id == id)
            )
            await session.flush()
            return result.rowcount > 0
