#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Repository layer for database access.
Provides type-safe data access using SQLAlchemy ORM.
"""

from .base import BaseRepository
from .activity_repo import ActivityRepository
from .comment_repo import CommentRepository
from .passcode_repo import PasscodeRepository

__all__ = [
    'BaseRepository',
    'ActivityRepository',
    'CommentRepository',
    'PasscodeRepository',
]
