#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging

from flask import Flask

from config import SECRET_KEY, LOG_LEVEL, LOG_FORMAT, PORT, DEBUG
from db import init_database
from routes.main_routes import main_bp
from routes.admin_data_routes import admin_data_bp
from routes.passcode_routes import passcode_bp

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO), format=LOG_FORMAT)


def create_app(passcode_service=None, data_transfer_service=None):
    """
    Build the Flask application.

    Services default to the database-backed instances from services_init;
    pass replacements to run against other stores.
    """
    if passcode_service is None or data_transfer_service is None:
        import services_init
        passcode_service = passcode_service or services_init.passcode_service
        data_transfer_service = data_transfer_service or services_init.data_transfer_service

    app = Flask(__name__)
    app.secret_key = SECRET_KEY
    app.json.sort_keys = False

    app.extensions['passcode_service'] = passcode_service
    app.extensions['data_transfer_service'] = data_transfer_service

    app.register_blueprint(main_bp)
    app.register_blueprint(admin_data_bp)
    app.register_blueprint(passcode_bp)

    return app


if __name__ == '__main__':
    init_database()
    app = create_app()
    app.run(debug=DEBUG, host='0.0.0.0', port=PORT)
