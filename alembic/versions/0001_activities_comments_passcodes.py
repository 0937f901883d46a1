"""Create activities, comments and passcodes tables

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'activities',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.Text(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sortIndex', sa.Integer(), nullable=True),
        sa.Column('scheduleIndex', sa.Integer(), nullable=True),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updatedAt', sa.DateTime(), server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )
    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('activityId', sa.Integer(),
                  sa.ForeignKey('activities.id', ondelete='CASCADE'), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updatedAt', sa.DateTime(), server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )
    op.create_index('idx_comments_activity', 'comments', ['activityId'])
    op.create_table(
        'passcodes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False, unique=True),
        sa.Column('passcode', sa.Text(), nullable=False),
        sa.Column('updatedAt', sa.DateTime(), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table('passcodes')
    op.drop_index('idx_comments_activity', table_name='comments')
    op.drop_table('comments')
    op.drop_table('activities')
