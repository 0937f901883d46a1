from flask import Blueprint, jsonify, request, current_app
from auth import get_passcode_service
from config import ADMIN_PASSCODE_ROLE
from services.passcode_service import AdminAccessError

passcode_bp = Blueprint('passcodes', __name__)

# Request field -> passcode role
PASSCODE_FIELDS = {
    'adminPasscode': 'admin',
    'editorPasscode': 'editor',
    'userPasscode': 'user',
}


@passcode_bp.route('/api/passcodes', methods=['PUT'])
def update_passcodes():
    """Replace one or more role passcodes, authenticated with the admin passcode"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    passcode_service = get_passcode_service()

    try:
        passcode_service.verify(ADMIN_PASSCODE_ROLE, data.get('authentication'))
    except AdminAccessError as e:
        return jsonify({'message': e.error}), e.status_code

    updates = {
        role: data[field]
        for field, role in PASSCODE_FIELDS.items()
        if isinstance(data.get(field), str) and data[field]
    }
    if not updates:
        return jsonify({'message': 'No passcodes supplied'}), 400

    try:
        passcode_service.update_passcodes(updates)
    except Exception as e:
        current_app.logger.error(f"Error updating passcodes: {e}")
        return jsonify({'message': 'Failed to update passcodes', 'details': str(e)}), 500

    current_app.logger.info(f"Passcodes updated for roles: {', '.join(sorted(updates))}")
    return jsonify({'message': 'Passcodes updated'})
