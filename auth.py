from functools import wraps
from flask import request, jsonify, current_app

from config import ADMIN_PASSCODE_ROLE
from services.passcode_service import AdminAccessError


def get_passcode_service():
    """Passcode service registered on the running app"""
    return current_app.extensions['passcode_service']


def get_request_password(field: str = 'password'):
    """Read the caller's password from the JSON body"""
    data = request.get_json(silent=True) or {}
    return data.get(field) if isinstance(data, dict) else None


# Decorators for route protection
def admin_passcode_required(f):
    """Decorator to require the admin passcode in the JSON body"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            get_passcode_service().verify(ADMIN_PASSCODE_ROLE, get_request_password())
        except AdminAccessError as e:
            current_app.logger.warning(f"Admin request to {request.path} rejected: {e.error}")
            return jsonify(e.to_dict()), e.status_code

        return f(*args, **kwargs)
    return decorated_function
