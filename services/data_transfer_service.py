"""
Data Transfer Service Layer

Export, import and wipe of the activities and comments tables for the admin
panel. Each operation runs in a single database transaction; the HTTP layer
only translates the results and errors defined here.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

from db import DatabaseSession
from repositories import ActivityRepository, CommentRepository
from services.sql_dump import render_sql_dump, format_timestamp

logger = logging.getLogger(__name__)


class DataTransferError(Exception):
    """Base class for admin data operation failures"""
    status_code = 500
    error = 'Database operation failed'

    def __init__(self, details: Optional[str] = None):
        super().__init__(details or self.error)
        self.details = details

    def to_dict(self) -> Dict[str, str]:
        payload = {'error': self.error}
        if self.details is not None:
            payload['details'] = self.details
        return payload


class InvalidImportFormat(DataTransferError):
    """Raised when the import payload has no usable activities list"""
    status_code = 400
    error = 'Invalid import data format'


class ExportFailed(DataTransferError):
    error = 'Failed to export database'


class ImportFailed(DataTransferError):
    error = 'Failed to import database'


class WipeFailed(DataTransferError):
    error = 'Failed to wipe database'


@dataclass
class ExportBundle:
    """Full read-only copy of both tables"""
    export_date: str
    activities: List[Dict[str, Any]] = field(default_factory=list)
    comments: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def total_activities(self) -> int:
        return len(self.activities)

    @property
    def total_comments(self) -> int:
        return len(self.comments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'exportDate': self.export_date,
            'activities': self.activities,
            'comments': self.comments,
            'totalActivities': self.total_activities,
            'totalComments': self.total_comments,
        }


@dataclass
class ImportResult:
    """Counts of rows written by an import"""
    activities: int
    comments: int
    cleared_existing: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': True,
            'message': 'Data imported successfully',
            'imported': {
                'activities': self.activities,
                'comments': self.comments,
            },
            'clearedExisting': self.cleared_existing,
        }


@dataclass
class WipeResult:
    """Pre-deletion snapshot returned by a wipe"""
    snapshot: ExportBundle
    sql_dump: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': True,
            'message': 'Database wiped successfully',
            'snapshot': self.snapshot.to_dict(),
            'sqlDump': self.sql_dump,
            'wiped': {
                'activities': self.snapshot.total_activities,
                'comments': self.snapshot.total_comments,
            },
        }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


INDEX_FIELDS = ('sortIndex', 'scheduleIndex')


def _is_index(value: Any) -> bool:
    return value is None or (isinstance(value, int) and not isinstance(value, bool))


def _source_key(value: Any) -> Optional[str]:
    # Source ids arrive from JSON as numbers or strings; 1 and "1" are the same activity
    return None if value is None else str(value)


class DataTransferService:
    """Business logic for exporting, importing and wiping admin data"""

    def __init__(self, database: DatabaseSession, clock: Callable[[], datetime] = _utcnow):
        self.db = database
        self.clock = clock

    @staticmethod
    def validate_import_data(import_data: Any) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
        """
        Check the import payload shape before any database access.

        Returns:
            (activities, comments) lists from the payload

        Raises:
            InvalidImportFormat: if activities is missing or not a list of objects,
                or an activity carries a non-integer sortIndex/scheduleIndex
        """
        if not isinstance(import_data, dict) or not isinstance(import_data.get('activities'), list):
            raise InvalidImportFormat()

        activities = import_data['activities']
        comments = import_data.get('comments') or []
        if not isinstance(comments, list):
            raise InvalidImportFormat()
        if not all(isinstance(item, dict) for item in activities + comments):
            raise InvalidImportFormat()
        if not all(_is_index(item.get(key)) for item in activities for key in INDEX_FIELDS):
            raise InvalidImportFormat()

        return activities, comments

    def _read_snapshot(self, session) -> ExportBundle:
        activities = ActivityRepository(session)
        comments = CommentRepository(session)

        activity_rows = activities.to_dict_list(activities.get_all())
        comment_rows = comments.to_dict_list(comments.get_all())

        return ExportBundle(
            export_date=format_timestamp(self.clock()),
            activities=activity_rows,
            comments=comment_rows
        )

    @staticmethod
    def _clear_tables(session) -> Tuple[int, int]:
        """Delete comments, then activities, then restart both id sequences."""
        comments = CommentRepository(session)
        activities = ActivityRepository(session)

        deleted_comments = comments.delete_all()
        deleted_activities = activities.delete_all()
        activities.reset_sequence()
        comments.reset_sequence()
        return deleted_activities, deleted_comments

    def export_data(self) -> Tuple[ExportBundle, str]:
        """
        Read both tables and render them as a bundle plus SQL dump.

        Raises:
            ExportFailed: on any database or rendering error; nothing partial is returned
        """
        try:
            with self.db.session_scope() as session:
                bundle = self._read_snapshot(session)
            sql_dump = render_sql_dump(bundle.activities, bundle.comments, bundle.export_date)
        except Exception as e:
            logger.error(f"Database export error: {e}", exc_info=True)
            raise ExportFailed(str(e)) from e

        logger.info(
            f"Exported {bundle.total_activities} activities and {bundle.total_comments} comments"
        )
        return bundle, sql_dump

    def import_data(self, import_data: Any, clear_existing: bool = False) -> ImportResult:
        """
        Insert activities and comments from an export bundle.

        Comment activity references are rewritten to the IDs this database
        assigns to the matching payload activities. Comments pointing at an
        activity that is not part of the payload are skipped.

        Args:
            import_data: {'activities': [...], 'comments': [...]}
            clear_existing: wipe both tables and restart IDs first

        Raises:
            InvalidImportFormat: payload shape is wrong (no database access made)
            ImportFailed: any database error; the transaction is rolled back
        """
        payload_activities, payload_comments = self.validate_import_data(import_data)
        clear_existing = bool(clear_existing)

        try:
            with self.db.session_scope() as session:
                if clear_existing:
                    cleared = self._clear_tables(session)
                    logger.info(f"Cleared {cleared[0]} activities and {cleared[1]} comments before import")

                activities = ActivityRepository(session)
                comments = CommentRepository(session)

                id_map: Dict[str, int] = {}
                for item in payload_activities:
                    created = activities.create_activity(
                        title=item.get('title'),
                        description=item.get('description'),
                        sort_index=item.get('sortIndex'),
                        schedule_index=item.get('scheduleIndex')
                    )
                    source_id = _source_key(item.get('id'))
                    if source_id is not None:
                        id_map[source_id] = created.id

                imported_comments = 0
                for item in payload_comments:
                    new_activity_id = id_map.get(_source_key(item.get('activityId')))
                    if new_activity_id is None:
                        logger.debug(f"Skipping comment {item.get('id')}: activity {item.get('activityId')} not imported")
                        continue
                    comments.create_comment(new_activity_id, item.get('message'))
                    imported_comments += 1
        except Exception as e:
            logger.error(f"Database import error: {e}", exc_info=True)
            raise ImportFailed(str(e)) from e

        result = ImportResult(
            activities=len(payload_activities),
            comments=imported_comments,
            cleared_existing=clear_existing
        )
        logger.info(
            f"Imported {result.activities} activities and {result.comments} comments "
            f"(clear_existing={clear_existing})"
        )
        return result

    def wipe_data(self) -> WipeResult:
        """
        Snapshot both tables, then delete everything and restart IDs.

        The snapshot and dump are built in memory before the first delete and
        are the only record of the removed rows.

        Raises:
            WipeFailed: on any database error; the transaction is rolled back
        """
        try:
            with self.db.session_scope() as session:
                snapshot = self._read_snapshot(session)
                sql_dump = render_sql_dump(snapshot.activities, snapshot.comments, snapshot.export_date)
                self._clear_tables(session)
        except Exception as e:
            logger.error(f"Database wipe error: {e}", exc_info=True)
            raise WipeFailed(str(e)) from e

        logger.warning(
            f"Database wiped: {snapshot.total_activities} activities and "
            f"{snapshot.total_comments} comments removed"
        )
        return WipeResult(snapshot=snapshot, sql_dump=sql_dump)
