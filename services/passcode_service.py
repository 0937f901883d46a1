"""
Passcode Service

Looks up named passcodes (admin, editor, user) and checks caller-supplied
values against them. The backing store is injected so the lookup can be
replaced without touching the database.
"""

import logging
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from db import DatabaseSession
from repositories import PasscodeRepository

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when no passcode is configured for a role"""
    pass


class AdminAccessError(Exception):
    """Base class for passcode gate failures, carrying the HTTP outcome"""
    status_code = 500
    error = 'Access denied'

    def to_dict(self) -> Dict[str, str]:
        return {'error': self.error}


class AdminNotConfigured(AdminAccessError):
    """The passcode for the role could not be retrieved"""
    status_code = 500
    error = 'Admin passcode not configured'


class Unauthorized(AdminAccessError):
    """The supplied password does not match"""
    status_code = 401
    error = 'Unauthorized'


class DatabasePasscodeStore:
    """Passcode store backed by the passcodes table"""

    def __init__(self, database: DatabaseSession):
        self.db = database

    def get(self, name: str) -> Optional[str]:
        with self.db.session_scope() as session:
            return PasscodeRepository(session).get_passcode(name)

    def set(self, name: str, value: str) -> None:
        with self.db.session_scope() as session:
            PasscodeRepository(session).set_passcode(name, value)


class PasscodeService:
    """Business logic for reading, checking and updating passcodes"""

    def __init__(self, store):
        self.store = store

    def get_passcode_by_name(self, name: str) -> str:
        """
        Get the configured passcode for a role.

        Raises:
            ConfigurationError: if the role has no passcode or the store fails
        """
        try:
            value = self.store.get(name)
        except SQLAlchemyError as e:
            raise ConfigurationError(f"Could not read passcode '{name}': {e}") from e

        if not value:
            raise ConfigurationError(f"No passcode configured for role '{name}'")
        return value

    def verify(self, role: str, supplied: Optional[str]) -> None:
        """
        Check a caller-supplied password against the role's passcode.

        Retrieval happens first: a missing passcode is reported as
        AdminNotConfigured, a mismatch as Unauthorized.
        """
        try:
            expected = self.get_passcode_by_name(role)
        except ConfigurationError as e:
            logger.error(f"Failed to get {role} passcode: {e}")
            raise AdminNotConfigured() from e

        if supplied != expected:
            logger.warning(f"Rejected {role} passcode attempt")
            raise Unauthorized()

    def update_passcodes(self, passcodes: Dict[str, str]) -> int:
        """
        Store new passcodes for the given roles.

        Returns:
            Number of roles updated
        """
        for name, value in passcodes.items():
            self.store.set(name, value)
            logger.info(f"Passcode for role '{name}' updated")
        return len(passcodes)
