#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base repository class with common data access operations.
"""

from typing import Type, TypeVar, Generic, List, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import select, delete, func, text

from models import Base

T = TypeVar('T', bound=Base)


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common operations.

    Usage:
        class ActivityRepository(BaseRepository[Activity]):
            model_class = Activity
    """

    model_class: Type[T] = None

    def __init__(self, session: Session):
        """
        Initialize repository with a database session.

        Args:
            session: SQLAlchemy session instance
        """
        self.session = session

    @property
    def table_name(self) -> str:
        return self.model_class.__tablename__

    def get_all(self) -> List[T]:
        """
        Get all records for this model ordered by primary key.

        Returns:
            List of model instances
        """
        stmt = select(self.model_class).order_by(self._get_primary_key_column())
        result = self.session.execute(stmt)
        return list(result.scalars().all())

    def add(self, entity: T) -> T:
        """
        Add a new record.

        Args:
            entity: Model instance to add

        Returns:
            The added entity with generated ID
        """
        self.session.add(entity)
        self.session.flush()  # Get the generated ID
        return entity

    def count(self) -> int:
        """
        Get the total count of records.

        Returns:
            Number of records
        """
        stmt = select(func.count()).select_from(self.model_class)
        result = self.session.execute(stmt)
        return result.scalar()

    def delete_all(self) -> int:
        """
        Delete every record of this model.

        Returns:
            Number of deleted rows
        """
        result = self.session.execute(delete(self.model_class))
        self.session.flush()
        return result.rowcount

    def reset_sequence(self) -> None:
        """Restart the identifier sequence so the next inserted row gets id 1."""
        dialect = self.session.get_bind().dialect.name
        pk_name = self._get_primary_key_column().name

        if dialect == 'postgresql':
            self.session.execute(text(
                f"SELECT setval(pg_get_serial_sequence('{self.table_name}', '{pk_name}'), 1, false)"
            ))
        elif dialect == 'sqlite':
            self.session.execute(
                text("DELETE FROM sqlite_sequence WHERE name = :table"),
                {'table': self.table_name}
            )
        else:
            raise RuntimeError(f"Sequence reset not supported for {dialect}")

    def _get_primary_key_column(self):
        """Get the primary key column for this model."""
        pk_columns = self.model_class.__table__.primary_key.columns
        return list(pk_columns)[0]

    def to_dict_list(self, entities: List[T]) -> List[Dict[str, Any]]:
        """
        Convert list of entities to list of dictionaries.

        Args:
            entities: List of model instances

        Returns:
            List of dictionary representations
        """
        return [e.to_dict() for e in entities]
