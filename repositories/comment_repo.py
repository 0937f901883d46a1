#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Comment repository for database operations.
"""

from typing import Optional

from .base import BaseRepository
from models import Comment


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment operations."""

    model_class = Comment

    def create_comment(self, activity_id: int, message: Optional[str]) -> Comment:
        """
        Insert a new comment for an existing activity.

        Args:
            activity_id: ID of the activity in this database
            message: Comment text

        Returns:
            The persisted Comment
        """
        return self.add(Comment(activity_id=activity_id, message=message))
