#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line access to the admin data operations.

Usage:
    python manage_data.py init-db
    python manage_data.py export [output_dir]
    python manage_data.py import <export.json> [--clear]
    python manage_data.py wipe [output_dir]
    python manage_data.py set-passcode <role> <value>

Runs directly against DATABASE_URL, so no passcode is asked for.
"""

import json
import os
import sys
from datetime import datetime

from config import EXPORT_FILE_PREFIX
from db import init_database
from services.data_transfer_service import DataTransferError
from services_init import data_transfer_service, passcode_service

USAGE = __doc__.split('Runs directly')[0].strip()


def _timestamp() -> str:
    return datetime.now().strftime('%Y-%m-%d_%H-%M-%S')


def _write_files(output_dir: str, stem: str, bundle_dict: dict, sql_dump: str) -> None:
    os.makedirs(output_dir, exist_ok=True)
    json_path = os.path.join(output_dir, f"{stem}.json")
    sql_path = os.path.join(output_dir, f"{stem}.sql")

    with open(json_path, 'w', encoding='utf-8') as f:
        json.dump(bundle_dict, f, ensure_ascii=False, indent=2)
    with open(sql_path, 'w', encoding='utf-8') as f:
        f.write(sql_dump)

    print(f"   ✓ {json_path}")
    print(f"   ✓ {sql_path}")


def export_database(output_dir: str = '.') -> bool:
    """Export both tables to a JSON bundle and an SQL dump"""
    try:
        bundle, sql_dump = data_transfer_service.export_data()
    except DataTransferError as e:
        print(f"❌ {e.error}: {e.details}")
        return False

    print(f"📦 Exported {bundle.total_activities} activities and {bundle.total_comments} comments")
    _write_files(output_dir, f"{EXPORT_FILE_PREFIX}-export-{_timestamp()}", bundle.to_dict(), sql_dump)
    return True


def import_database(json_file: str, clear_existing: bool = False) -> bool:
    """Import an export bundle from a JSON file"""
    try:
        with open(json_file, 'r', encoding='utf-8') as f:
            import_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"❌ Could not read {json_file}: {e}")
        return False

    print(f"📥 Importing {json_file} (clear existing: {'yes' if clear_existing else 'no'})")
    try:
        result = data_transfer_service.import_data(import_data, clear_existing=clear_existing)
    except DataTransferError as e:
        print(f"❌ {e.error}" + (f": {e.details}" if e.details else ''))
        return False

    print(f"✅ Imported {result.activities} activities and {result.comments} comments")
    return True


def wipe_database(output_dir: str = '.') -> bool:
    """Wipe both tables after saving a backup of their contents"""
    answer = input("⚠️  This will DELETE ALL DATA. Type 'WIPE' to confirm: ").strip()
    if answer != 'WIPE':
        print("Aborted")
        return False

    try:
        result = data_transfer_service.wipe_data()
    except DataTransferError as e:
        print(f"❌ {e.error}: {e.details}")
        return False

    _write_files(
        output_dir,
        f"{EXPORT_FILE_PREFIX}-backup-before-wipe-{_timestamp()}",
        result.snapshot.to_dict(),
        result.sql_dump
    )
    print(f"🗑️  Deleted {result.snapshot.total_activities} activities "
          f"and {result.snapshot.total_comments} comments")
    return True


def set_passcode(role: str, value: str) -> bool:
    """Create or replace a role passcode"""
    if not value:
        print("❌ Passcode must not be empty")
        return False
    passcode_service.update_passcodes({role: value})
    print(f"✅ Passcode for '{role}' saved")
    return True


def main(argv) -> int:
    if not argv:
        print(USAGE)
        return 1

    command, args = argv[0], argv[1:]

    if command == 'init-db':
        init_database()
        print("✅ Tables created")
        return 0
    if command == 'export':
        return 0 if export_database(*args[:1]) else 1
    if command == 'import' and args:
        return 0 if import_database(args[0], clear_existing='--clear' in args[1:]) else 1
    if command == 'wipe':
        return 0 if wipe_database(*args[:1]) else 1
    if command == 'set-passcode' and len(args) == 2:
        return 0 if set_passcode(args[0], args[1]) else 1

    print(USAGE)
    return 1


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
