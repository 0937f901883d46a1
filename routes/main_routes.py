from flask import Blueprint, jsonify, redirect, url_for, current_app
from db import db, execute_raw_sql

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Send visitors to the admin page"""
    return redirect(url_for('admin_data.config_page'))


@main_bp.route('/api/health')
def health_check():
    """Check that the API and database are reachable"""
    try:
        execute_raw_sql('SELECT 1')
    except Exception as e:
        current_app.logger.error(f"Health check failed: {e}")
        return jsonify({'status': 'unhealthy', 'database': db.get_db_type(), 'details': str(e)}), 503

    return jsonify({'status': 'healthy', 'database': db.get_db_type()})
