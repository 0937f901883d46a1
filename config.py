#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Application configuration.

Values come from environment variables (optionally loaded from a .env file).
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Flask
SECRET_KEY = os.environ.get('SECRET_KEY', 'kitefestival_admin_secret_key_change_me')
PORT = int(os.environ.get('PORT', 5001))
DEBUG = os.environ.get('FLASK_ENV') != 'production'

# Logging
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Passcodes
ADMIN_PASSCODE_ROLE = os.environ.get('ADMIN_PASSCODE_ROLE', 'admin')
PASSCODE_ROLES = ('admin', 'editor', 'user')

# Export / dump
DUMP_TITLE = os.environ.get('DUMP_TITLE', 'Kite Festival App Database Dump')
EXPORT_FILE_PREFIX = 'kitefestival'
