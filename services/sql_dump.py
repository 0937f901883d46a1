"""
SQL dump rendering for activities and comments.

Turns exported rows into an executable script of multi-row INSERT statements.
Output depends only on the rows and the timestamp passed in.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from config import DUMP_TITLE

ACTIVITY_COLUMNS = ('id', 'title', 'description', 'sortIndex', 'scheduleIndex', 'createdAt', 'updatedAt')
COMMENT_COLUMNS = ('id', 'activityId', 'message', 'createdAt', 'updatedAt')

TEXT_COLUMNS = {'title', 'description', 'message'}
TIMESTAMP_COLUMNS = {'createdAt', 'updatedAt'}


def quote_identifier(column: str) -> str:
    """Quote mixed-case column names the way PostgreSQL requires."""
    return f'"{column}"' if column != column.lower() else column


def sql_text(value: Optional[str]) -> str:
    if value is None:
        return 'NULL'
    return "'" + str(value).replace("'", "''") + "'"


def sql_timestamp(value: Union[datetime, str, None]) -> str:
    if value is None:
        return 'NULL'
    if isinstance(value, datetime):
        value = value.isoformat()
    return sql_text(value)


def sql_number(value: Any) -> str:
    if value is None:
        return 'NULL'
    return str(value)


def render_value(column: str, value: Any) -> str:
    if column in TEXT_COLUMNS:
        return sql_text(value)
    if column in TIMESTAMP_COLUMNS:
        return sql_timestamp(value)
    return sql_number(value)


def render_insert(table: str, columns: Sequence[str], rows: List[Dict[str, Any]]) -> str:
    """Render one multi-row INSERT statement, or an empty string for no rows."""
    if not rows:
        return ''

    column_list = ', '.join(quote_identifier(c) for c in columns)
    values = ',\n'.join(
        '(' + ', '.join(render_value(c, row.get(c)) for c in columns) + ')'
        for row in rows
    )
    return f"INSERT INTO {table} ({column_list}) VALUES\n{values};\n\n"


def format_timestamp(generated_at: Union[datetime, str, None] = None) -> str:
    """ISO-8601 timestamp for dump headers and export bundles."""
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)
    if isinstance(generated_at, datetime):
        return generated_at.isoformat()
    return generated_at


def render_sql_dump(activities: Iterable[Dict[str, Any]],
                    comments: Iterable[Dict[str, Any]],
                    generated_at: Union[datetime, str, None] = None) -> str:
    """
    Render activities and comments as an executable SQL script.

    Args:
        activities: Activity rows (export dictionaries), in output order
        comments: Comment rows (export dictionaries), in output order
        generated_at: Timestamp for the header; defaults to now (UTC)

    Returns:
        The SQL dump text
    """
    activities = list(activities)
    comments = list(comments)

    dump = f"-- {DUMP_TITLE}\n-- Export Date: {format_timestamp(generated_at)}\n\n"

    dump += f"-- Activities Table ({len(activities)} records)\n"
    dump += render_insert('activities', ACTIVITY_COLUMNS, activities)

    dump += f"-- Comments Table ({len(comments)} records)\n"
    dump += render_insert('comments', COMMENT_COLUMNS, comments)

    return dump
