#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Activity repository for database operations.
"""

from typing import Optional

from .base import BaseRepository
from models import Activity


class ActivityRepository(BaseRepository[Activity]):
    """Repository for Activity operations."""

    model_class = Activity

    def create_activity(self, title: Optional[str], description: Optional[str],
                        sort_index: Optional[int] = 0,
                        schedule_index: Optional[int] = None) -> Activity:
        """
        Insert a new activity and return it with its assigned ID.

        Args:
            title: Activity title
            description: Activity description
            sort_index: Display order
            schedule_index: Position in the schedule, if scheduled

        Returns:
            The persisted Activity
        """
        activity = Activity(
            title=title,
            description=description,
            sort_index=sort_index,
            schedule_index=schedule_index
        )
        return self.add(activity)
