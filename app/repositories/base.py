"""
Base repository class with common CRUD operations using async SQLAlchemy.
Provides generic database operations that can be extended by specific repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.orm.interfaces import LoaderOption
from app.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type, Sequence
import uuid
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common CRUD operations.
    Every write commits immediately and rolls back on failure.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record in the database.

        Args:
            obj_in: Dictionary of field values for the new record

        Returns:
            Created model instance

        Raises:
            SQLAlchemyError: If database operation fails (IntegrityError on constraint violations)
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create {self.model.__name__}: {e}")
            raise

    async def bulk_create(self, objects_in: List[Dict[str, Any]]) -> List[ModelType]:
        """
        Create multiple records in a single transaction.

        Args:
            objects_in: List of dictionaries with field values

        Returns:
            List of created model instances
        """
        try:
            db_objects = [self.model(**obj_data) for obj_data in objects_in]
            self.db.add_all(db_objects)
            await self.db.commit()
            logger.debug(f"Bulk created {len(db_objects)} {self.model.__name__} records")
            return db_objects
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to bulk create {self.model.__name__} records: {e}")
            raise

    async def get_by_id(
        self,
        id: uuid.UUID,
        options: Optional[Sequence[LoaderOption]] = None
    ) -> Optional[ModelType]:
        """
        Get a record by its ID.

        Args:
            id: UUID of the record to retrieve
            options: Loader options, e.g. selectinload() for relationships

        Returns:
            Model instance if found, None otherwise
        """
        return await self.get_by_field("id", id, options=options)

    async def get_by_field(
        self,
        field: str,
        value: Any,
        options: Optional[Sequence[LoaderOption]] = None
    ) -> Optional[ModelType]:
        """
        Get a record by a specific field value.

        Args:
            field: Field name to search by
            value: Value to search for
            options: Loader options for relationships

        Returns:
            Model instance if found, None otherwise
        """
        try:
            if not hasattr(self.model, field):
                raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")

            query = (
                select(self.model)
                .where(getattr(self.model, field) == value)
                .execution_options(populate_existing=True)
            )
            if options:
                query = query.options(*options)

            result = await self.db.execute(query)
            obj = result.scalar_one_or_none()

            if obj:
                logger.debug(f"Retrieved {self.model.__name__} by {field}: {value}")
            else:
                logger.debug(f"{self.model.__name__} with {field}={value} not found")

            return obj
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by {field}={value}: {e}")
            raise

    async def update(self, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        """
        Shallow-merge the given fields into a loaded record and persist it.

        Args:
            db_obj: Instance to update
            obj_in: Field values to overwrite; keys not present are left untouched

        Returns:
            Updated model instance
        """
        record_id = db_obj.id
        try:
            for field, value in obj_in.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)
            await self.db.commit()
            logger.debug(f"Updated {self.model.__name__} with id: {record_id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update {self.model.__name__} {record_id}: {e}")
            raise

    async def delete(self, id: uuid.UUID) -> bool:
        """
        Delete a record by its ID.
        Dependent rows are handled by the foreign keys' ON DELETE rules.

        Returns:
            True if record was deleted, False if not found
        """
        try:
            stmt = delete(self.model).where(self.model.id == id)
            result = await self.db.execute(stmt)
            await self.db.commit()

            deleted = result.rowcount > 0
            if deleted:
                logger.debug(f"Deleted {self.model.__name__} with id: {id}")
            else:
                logger.debug(f"{self.model.__name__} with id {id} not found for deletion")

            return deleted
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} {id}: {e}")
            raise

    async def exists(self, id: uuid.UUID) -> bool:
        """
        Check if a record exists by its ID.

        Returns:
            True if record exists, False otherwise
        """
        try:
            query = select(func.count(self.model.id)).where(self.model.id == id)
            result = await self.db.execute(query)
            exists = result.scalar() > 0
            logger.debug(f"{self.model.__name__} with id {id} exists: {exists}")
            return exists
        except Exception as e:
            logger.error(f"Failed to check existence of {self.model.__name__} {id}: {e}")
            raise
