#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Passcode repository for database operations.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import select

from .base import BaseRepository
from models import Passcode


class PasscodeRepository(BaseRepository[Passcode]):
    """Repository for Passcode operations."""

    model_class = Passcode

    def get_passcode(self, name: str) -> Optional[str]:
        """
        Get a passcode value by role name.

        Args:
            name: Role name (e.g. 'admin')

        Returns:
            Passcode value or None
        """
        stmt = select(Passcode).where(Passcode.name == name)
        result = self.session.execute(stmt)
        passcode = result.scalar_one_or_none()
        return passcode.passcode if passcode else None

    def set_passcode(self, name: str, value: str) -> bool:
        """
        Create or update the passcode for a role.

        Args:
            name: Role name
            value: New passcode

        Returns:
            True if a new row was created, False if an existing one was updated
        """
        stmt = select(Passcode).where(Passcode.name == name)
        result = self.session.execute(stmt)
        passcode = result.scalar_one_or_none()

        created = passcode is None
        if passcode:
            passcode.passcode = value
            passcode.updated_at = datetime.now()
        else:
            passcode = Passcode(name=name, passcode=value)
            self.session.add(passcode)

        self.session.flush()
        return created
