from flask import Blueprint, jsonify, request, current_app, render_template
from auth import admin_passcode_required
from config import EXPORT_FILE_PREFIX, PASSCODE_ROLES
from services.data_transfer_service import DataTransferError

admin_data_bp = Blueprint('admin_data', __name__)


def get_data_transfer_service():
    return current_app.extensions['data_transfer_service']


@admin_data_bp.route('/config')
def config_page():
    """Admin page: export, import, wipe and passcode management"""
    return render_template('config.html',
                           file_prefix=EXPORT_FILE_PREFIX,
                           passcode_roles=PASSCODE_ROLES)


@admin_data_bp.route('/api/admin/export', methods=['POST'])
@admin_passcode_required
def export_database():
    """Export both tables as JSON plus an SQL dump"""
    try:
        bundle, sql_dump = get_data_transfer_service().export_data()
    except DataTransferError as e:
        current_app.logger.error(f"Database export error: {e.details}")
        return jsonify(e.to_dict()), e.status_code

    return jsonify({
        'success': True,
        'exportData': bundle.to_dict(),
        'sqlDump': sql_dump
    })


@admin_data_bp.route('/api/admin/import', methods=['POST'])
@admin_passcode_required
def import_database():
    """Import activities and comments from an export bundle"""
    data = request.get_json(silent=True) or {}

    try:
        result = get_data_transfer_service().import_data(
            data.get('importData'),
            clear_existing=data.get('clearExisting', False)
        )
    except DataTransferError as e:
        current_app.logger.error(f"Database import error: {e.error} {e.details or ''}".strip())
        return jsonify(e.to_dict()), e.status_code

    current_app.logger.info(
        f"Import finished: {result.activities} activities, {result.comments} comments"
    )
    return jsonify(result.to_dict())


@admin_data_bp.route('/api/admin/wipe', methods=['POST'])
@admin_passcode_required
def wipe_database():
    """Delete all activities and comments, returning a snapshot of what was removed"""
    try:
        result = get_data_transfer_service().wipe_data()
    except DataTransferError as e:
        current_app.logger.error(f"Database wipe error: {e.details}")
        return jsonify(e.to_dict()), e.status_code

    return jsonify(result.to_dict())
