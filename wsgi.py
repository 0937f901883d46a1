#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
WSGI entry point: gunicorn wsgi:app
"""

from app import create_app
from db import init_database

init_database()
app = create_app()
