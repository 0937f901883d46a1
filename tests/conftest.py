"""
Pytest configuration and fixtures
"""
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# In-memory SQLite for every test run; must be set before db is imported
os.environ['DATABASE_URL'] = 'sqlite://'

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app import create_app  # noqa: E402
from db import db as database_session  # noqa: E402
from models import Activity, Comment  # noqa: E402
from repositories import ActivityRepository, CommentRepository  # noqa: E402
from services.data_transfer_service import DataTransferService  # noqa: E402
from services.passcode_service import PasscodeService  # noqa: E402

ADMIN_PASSWORD = 'test_admin_password'
FIXED_NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class DictPasscodeStore:
    """Passcode store kept in memory"""

    def __init__(self, initial=None):
        self.values = dict(initial or {})

    def get(self, name):
        return self.values.get(name)

    def set(self, name, value):
        self.values[name] = value


@pytest.fixture
def database():
    """Fresh schema for each test."""
    database_session.drop_all_tables()
    database_session.create_all_tables()
    yield database_session
    database_session.drop_all_tables()


@pytest.fixture
def passcode_store():
    return DictPasscodeStore({'admin': ADMIN_PASSWORD})


@pytest.fixture
def passcode_service(passcode_store):
    return PasscodeService(passcode_store)


@pytest.fixture
def data_service(database):
    return DataTransferService(database, clock=lambda: FIXED_NOW)


@pytest.fixture
def app(passcode_service, data_service):
    app = create_app(passcode_service=passcode_service, data_transfer_service=data_service)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seed(database):
    """Insert activities and comments; returns a function taking plain dicts."""
    def _seed(activities=(), comments=()):
        with database.session_scope() as session:
            created = []
            for item in activities:
                activity = Activity(
                    title=item.get('title'),
                    description=item.get('description'),
                    sort_index=item.get('sortIndex', 0),
                    schedule_index=item.get('scheduleIndex')
                )
                session.add(activity)
                session.flush()
                created.append(activity.id)
            for item in comments:
                session.add(Comment(activity_id=item['activityId'], message=item.get('message')))
            return created
    return _seed


@pytest.fixture
def table_counts(database):
    """Current (activities, comments) row counts."""
    def _counts():
        with database.session_scope() as session:
            return ActivityRepository(session).count(), CommentRepository(session).count()
    return _counts


@pytest.fixture
def make_passcode_service():
    """Build a PasscodeService over an in-memory store with the given values."""
    def _make(values=None):
        return PasscodeService(DictPasscodeStore(values))
    return _make
