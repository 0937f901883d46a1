#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SQLAlchemy 2.0 ORM Models for the Kite Festival admin panel

This module defines the activities, comments and passcodes tables using
SQLAlchemy 2.0 declarative syntax. Column names keep the camelCase spelling
used by the web client ("sortIndex", "createdAt", ...).
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class Activity(Base):
    """Festival programme activity."""
    __tablename__ = 'activities'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sort_index: Mapped[Optional[int]] = mapped_column('sortIndex', Integer, nullable=True, default=0)
    schedule_index: Mapped[Optional[int]] = mapped_column('scheduleIndex', Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column('createdAt', DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column('updatedAt', DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    comments: Mapped[List["Comment"]] = relationship(
        "Comment", back_populates="activity", passive_deletes=True
    )

    __table_args__ = (
        {'sqlite_autoincrement': True},
    )

    def to_dict(self) -> dict:
        """Convert model to the dictionary shape used by exports."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'sortIndex': self.sort_index,
            'scheduleIndex': self.schedule_index,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }


class Comment(Base):
    """Comment attached to an activity."""
    __tablename__ = 'comments'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    activity_id: Mapped[int] = mapped_column(
        'activityId', Integer, ForeignKey('activities.id', ondelete='CASCADE'), nullable=False
    )
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column('createdAt', DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column('updatedAt', DateTime, default=func.now(), onupdate=func.now())

    # Relationship
    activity: Mapped["Activity"] = relationship("Activity", back_populates="comments")

    __table_args__ = (
        Index('idx_comments_activity', 'activityId'),
        {'sqlite_autoincrement': True},
    )

    def to_dict(self) -> dict:
        """Convert model to the dictionary shape used by exports."""
        return {
            'id': self.id,
            'activityId': self.activity_id,
            'message': self.message,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }


class Passcode(Base):
    """Named passcode (admin, editor, user) gating client features."""
    __tablename__ = 'passcodes'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    passcode: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column('updatedAt', DateTime, default=func.now(), onupdate=func.now())
