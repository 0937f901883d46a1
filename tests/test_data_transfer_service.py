"""
Tests for DataTransferService against an in-memory SQLite database
"""
from unittest.mock import patch, Mock

import pytest
from sqlalchemy.exc import OperationalError

from models import Activity, Comment
from repositories import CommentRepository, ActivityRepository
from services.data_transfer_service import (
    DataTransferService, InvalidImportFormat, ExportFailed, ImportFailed, WipeFailed
)


def db_error(message='Database connection failed'):
    return OperationalError('SQL', {}, Exception(message))


PAYLOAD = {
    'activities': [
        {'id': 1, 'title': 'Test Activity', 'description': 'Test Description', 'sortIndex': 0, 'scheduleIndex': None}
    ],
    'comments': [
        {'id': 1, 'activityId': 1, 'message': 'Test Comment'}
    ]
}


@pytest.mark.unit
class TestValidateImportData:
    """Test payload shape validation."""

    @pytest.mark.parametrize('import_data', [
        None, {}, [], 'activities', {'comments': []}, {'activities': None},
        {'activities': {'id': 1}}, {'activities': [], 'comments': 'x'},
        {'activities': ['not an object']},
        {'activities': [{'id': 1, 'sortIndex': 'first'}]},
        {'activities': [{'id': 1, 'sortIndex': 1.5}]},
        {'activities': [{'id': 1, 'sortIndex': True}]},
        {'activities': [{'id': 1, 'scheduleIndex': '2'}]},
    ])
    def test_rejects_bad_shapes(self, import_data):
        with pytest.raises(InvalidImportFormat) as excinfo:
            DataTransferService.validate_import_data(import_data)

        assert excinfo.value.status_code == 400
        assert excinfo.value.to_dict() == {'error': 'Invalid import data format'}

    def test_empty_activities_list_is_valid(self):
        assert DataTransferService.validate_import_data({'activities': []}) == ([], [])

    def test_integer_and_missing_indexes_are_valid(self):
        activities = [{'id': 1, 'sortIndex': 3, 'scheduleIndex': None}, {'id': 2}]

        assert DataTransferService.validate_import_data({'activities': activities}) == (activities, [])

    def test_missing_comments_defaults_to_empty(self):
        activities, comments = DataTransferService.validate_import_data({'activities': [{'id': 1}]})

        assert activities == [{'id': 1}]
        assert comments == []

    def test_invalid_payload_never_touches_database(self):
        database = Mock()
        service = DataTransferService(database)

        with pytest.raises(InvalidImportFormat):
            service.import_data({}, clear_existing=True)

        database.session_scope.assert_not_called()


@pytest.mark.integration
class TestExport:
    """Test export_data."""

    def test_export_empty_database(self, data_service):
        bundle, sql_dump = data_service.export_data()

        assert bundle.to_dict() == {
            'exportDate': '2026-01-01T12:00:00+00:00',
            'activities': [],
            'comments': [],
            'totalActivities': 0,
            'totalComments': 0,
        }
        assert 'INSERT' not in sql_dump

    def test_export_rows_ordered_by_id(self, data_service, seed):
        ids = seed([{'title': 'B'}, {'title': 'A'}])
        seed(comments=[{'activityId': ids[1], 'message': 'second'}, {'activityId': ids[0], 'message': 'first'}])

        bundle, sql_dump = data_service.export_data()

        assert [a['title'] for a in bundle.activities] == ['B', 'A']
        assert [a['id'] for a in bundle.activities] == [1, 2]
        assert [c['message'] for c in bundle.comments] == ['second', 'first']
        assert bundle.comments[0]['activityId'] == 2
        assert bundle.total_activities == 2
        assert bundle.total_comments == 2
        assert set(bundle.activities[0]) == {
            'id', 'title', 'description', 'sortIndex', 'scheduleIndex', 'createdAt', 'updatedAt'
        }
        assert 'INSERT INTO activities' in sql_dump
        assert 'INSERT INTO comments' in sql_dump
        assert '-- Export Date: 2026-01-01T12:00:00+00:00' in sql_dump

    def test_comment_read_failure_fails_whole_export(self, data_service, seed):
        seed([{'title': 'A'}])

        with patch.object(CommentRepository, 'get_all', side_effect=db_error()):
            with pytest.raises(ExportFailed) as excinfo:
                data_service.export_data()

        assert excinfo.value.status_code == 500
        assert excinfo.value.to_dict()['error'] == 'Failed to export database'
        assert 'Database connection failed' in excinfo.value.to_dict()['details']

    def test_render_failure_is_reported_as_export_failure(self, data_service, seed):
        seed([{'title': 'A'}])

        with patch('services.data_transfer_service.render_sql_dump', side_effect=ValueError('bad value')):
            with pytest.raises(ExportFailed) as excinfo:
                data_service.export_data()

        assert excinfo.value.to_dict() == {'error': 'Failed to export database', 'details': 'bad value'}


@pytest.mark.integration
class TestImport:
    """Test import_data."""

    def test_comment_remapped_to_new_activity_id(self, data_service, seed, database):
        # Nine existing rows, so the imported activity gets id 10
        seed([{'title': f'Existing {i}'} for i in range(9)])

        result = data_service.import_data(PAYLOAD, clear_existing=False)

        assert result.to_dict() == {
            'success': True,
            'message': 'Data imported successfully',
            'imported': {'activities': 1, 'comments': 1},
            'clearedExisting': False,
        }
        with database.session_scope() as session:
            comment = session.query(Comment).one()
            assert comment.activity_id == 10
            assert comment.message == 'Test Comment'
            assert session.get(Activity, 10).title == 'Test Activity'

    def test_comment_for_unknown_activity_is_skipped(self, data_service, table_counts):
        payload = {
            'activities': [{'id': 5, 'title': 'Kept'}],
            'comments': [
                {'id': 1, 'activityId': 5, 'message': 'ok'},
                {'id': 2, 'activityId': 99, 'message': 'orphan'},
                {'id': 3, 'message': 'no activity'},
            ]
        }

        result = data_service.import_data(payload)

        assert result.activities == 1
        assert result.comments == 1
        assert table_counts() == (1, 1)

    def test_string_and_numeric_ids_match(self, data_service, database):
        payload = {
            'activities': [{'id': '3', 'title': 'A'}, {'id': 4, 'title': 'B'}],
            'comments': [{'activityId': 3, 'message': 'x'}, {'activityId': '4', 'message': 'y'}]
        }

        result = data_service.import_data(payload)

        assert result.comments == 2
        with database.session_scope() as session:
            assert [c.activity_id for c in session.query(Comment).order_by(Comment.id)] == [1, 2]

    def test_activity_without_id_gets_no_comments(self, data_service):
        payload = {
            'activities': [{'title': 'No id'}],
            'comments': [{'activityId': None, 'message': 'x'}]
        }

        result = data_service.import_data(payload)

        assert (result.activities, result.comments) == (1, 0)

    def test_clear_existing_restarts_ids(self, data_service, seed, database, table_counts):
        ids = seed([{'title': 'Old 1'}, {'title': 'Old 2'}])
        seed(comments=[{'activityId': ids[0], 'message': 'old'}])

        result = data_service.import_data(PAYLOAD, clear_existing=True)

        assert result.cleared_existing is True
        assert table_counts() == (1, 1)
        with database.session_scope() as session:
            activity = session.query(Activity).one()
            comment = session.query(Comment).one()
            assert activity.id == 1
            assert activity.title == 'Test Activity'
            assert comment.id == 1
            assert comment.activity_id == 1

    def test_empty_activities_with_clear_empties_tables(self, data_service, seed, table_counts):
        seed([{'title': 'Old'}])

        result = data_service.import_data({'activities': []}, clear_existing=True)

        assert (result.activities, result.comments) == (0, 0)
        assert table_counts() == (0, 0)

    def test_failure_rolls_back_everything(self, data_service, seed, table_counts):
        seed([{'title': 'Existing'}])

        with patch.object(CommentRepository, 'create_comment', side_effect=db_error('insert failed')):
            with pytest.raises(ImportFailed) as excinfo:
                data_service.import_data(PAYLOAD, clear_existing=True)

        assert excinfo.value.to_dict() == {
            'error': 'Failed to import database',
            'details': excinfo.value.details,
        }
        assert 'insert failed' in excinfo.value.details
        assert table_counts() == (1, 0)

    def test_export_then_import_round_trip(self, data_service, seed, table_counts):
        ids = seed([{'title': 'A', 'sortIndex': 1}, {'title': "B's", 'sortIndex': 2, 'scheduleIndex': 3}])
        seed(comments=[
            {'activityId': ids[0], 'message': 'one'},
            {'activityId': ids[1], 'message': 'two'},
            {'activityId': ids[1], 'message': 'three'},
        ])
        bundle, _ = data_service.export_data()

        result = data_service.import_data(bundle.to_dict(), clear_existing=True)

        assert (result.activities, result.comments) == (2, 3)
        assert table_counts() == (2, 3)
        reexported, _ = data_service.export_data()
        assert [a['title'] for a in reexported.activities] == ['A', "B's"]
        assert reexported.activities[1]['scheduleIndex'] == 3
        assert [c['activityId'] for c in reexported.comments] == [1, 2, 2]


@pytest.mark.integration
class TestWipe:
    """Test wipe_data."""

    def test_wipe_returns_snapshot_and_empties_tables(self, data_service, seed, table_counts):
        ids = seed([{'title': 'A'}, {'title': 'B'}])
        seed(comments=[{'activityId': ids[0], 'message': 'hi'}])

        result = data_service.wipe_data()
        payload = result.to_dict()

        assert payload['success'] is True
        assert payload['message'] == 'Database wiped successfully'
        assert payload['wiped'] == {'activities': 2, 'comments': 1}
        assert payload['snapshot']['totalActivities'] == len(payload['snapshot']['activities'])
        assert payload['snapshot']['totalComments'] == len(payload['snapshot']['comments'])
        assert payload['snapshot']['activities'][0]['title'] == 'A'
        assert 'INSERT INTO activities' in payload['sqlDump']
        assert "'hi'" in payload['sqlDump']
        assert table_counts() == (0, 0)

    def test_wipe_twice_reports_zero(self, data_service, seed):
        seed([{'title': 'A'}])
        data_service.wipe_data()

        second = data_service.wipe_data()

        assert second.to_dict()['wiped'] == {'activities': 0, 'comments': 0}
        assert 'INSERT' not in second.sql_dump

    def test_wipe_restarts_ids(self, data_service, seed, database):
        seed([{'title': 'A'}, {'title': 'B'}])
        data_service.wipe_data()

        assert seed([{'title': 'C'}]) == [1]

    def test_read_failure_deletes_nothing(self, data_service, seed, table_counts):
        ids = seed([{'title': 'A'}])
        seed(comments=[{'activityId': ids[0], 'message': 'keep'}])

        with patch.object(CommentRepository, 'get_all', side_effect=db_error()):
            with pytest.raises(WipeFailed):
                data_service.wipe_data()

        assert table_counts() == (1, 1)

    def test_delete_failure_rolls_back(self, data_service, seed, table_counts):
        ids = seed([{'title': 'A'}])
        seed(comments=[{'activityId': ids[0], 'message': 'keep'}])

        with patch.object(ActivityRepository, 'reset_sequence', side_effect=db_error('reset failed')):
            with pytest.raises(WipeFailed) as excinfo:
                data_service.wipe_data()

        assert excinfo.value.to_dict()['error'] == 'Failed to wipe database'
        assert table_counts() == (1, 1)
