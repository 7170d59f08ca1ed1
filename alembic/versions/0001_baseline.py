"""Baseline migration - users, buildings, flats, dues, requests, blog, sessions

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates every table used by SqlStorage and SqlSessionStore.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ID = sa.String(36)
TIMESTAMP = sa.DateTime(timezone=True)


def upgrade() -> None:
    """Create all tables."""

    # ==========================================================================
    # Users
    # ==========================================================================
    op.create_table(
        'users',
        sa.Column('id', ID, primary_key=True),
        sa.Column('username', sa.Text(), nullable=True, unique=True),
        sa.Column('password', sa.Text(), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default=sa.text("'user'")),
        sa.Column('email', sa.String(255), nullable=True, unique=True),
        sa.Column('first_name', sa.String(255), nullable=True),
        sa.Column('last_name', sa.String(255), nullable=True),
        sa.Column('profile_image_url', sa.String(500), nullable=True),
        sa.Column('created_at', TIMESTAMP, nullable=False),
        sa.Column('updated_at', TIMESTAMP, nullable=False),
    )

    # ==========================================================================
    # Buildings, residents, flats
    # ==========================================================================
    op.create_table(
        'buildings',
        sa.Column('id', ID, primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('total_flats', sa.Integer(), nullable=False),
        sa.Column('monthly_fee', sa.Numeric(10, 2), nullable=False),
        sa.Column(
            'manager_id', ID,
            sa.ForeignKey('users.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('created_at', TIMESTAMP, nullable=False),
        sa.CheckConstraint('total_flats >= 0', name='ck_buildings_total_flats_nonnegative'),
    )

    op.create_table(
        'residents',
        sa.Column('id', ID, primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('created_at', TIMESTAMP, nullable=False),
    )

    op.create_table(
        'flats',
        sa.Column('id', ID, primary_key=True),
        sa.Column(
            'building_id', ID,
            sa.ForeignKey('buildings.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('flat_number', sa.Text(), nullable=False),
        sa.Column('block', sa.Text(), nullable=True),
        sa.Column('size', sa.Integer(), nullable=True),
        sa.Column(
            'resident_id', ID,
            sa.ForeignKey('residents.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('created_at', TIMESTAMP, nullable=False),
    )
    op.create_index('ix_flats_building_id', 'flats', ['building_id'])

    # ==========================================================================
    # Fee payments and maintenance
    # ==========================================================================
    op.create_table(
        'fee_payments',
        sa.Column('id', ID, primary_key=True),
        sa.Column(
            'flat_id', ID,
            sa.ForeignKey('flats.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('is_paid', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('paid_at', TIMESTAMP, nullable=True),
        sa.Column('created_at', TIMESTAMP, nullable=False),
        sa.CheckConstraint('month BETWEEN 1 AND 12', name='ck_fee_payments_month_range'),
    )
    op.create_index('ix_fee_payments_flat_id', 'fee_payments', ['flat_id'])

    op.create_table(
        'maintenance_requests',
        sa.Column('id', ID, primary_key=True),
        sa.Column(
            'flat_id', ID,
            sa.ForeignKey('flats.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default=sa.text("'pending'")),
        sa.Column('priority', sa.String(20), nullable=False, server_default=sa.text("'medium'")),
        sa.Column('created_at', TIMESTAMP, nullable=False),
        sa.Column('resolved_at', TIMESTAMP, nullable=True),
    )
    op.create_index('ix_maintenance_requests_status', 'maintenance_requests', ['status'])

    # ==========================================================================
    # Public site: contact form and blog
    # ==========================================================================
    op.create_table(
        'contact_requests',
        sa.Column('id', ID, primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('service_type', sa.Text(), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default=sa.text("'new'")),
        sa.Column('created_at', TIMESTAMP, nullable=False),
    )

    op.create_table(
        'blog_posts',
        sa.Column('id', ID, primary_key=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('category', sa.Text(), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', TIMESTAMP, nullable=False),
    )
    op.create_index('ix_blog_posts_published', 'blog_posts', ['published'])

    # ==========================================================================
    # Sessions
    # ==========================================================================
    op.create_table(
        'sessions',
        sa.Column('sid', sa.String(128), primary_key=True),
        sa.Column(
            'user_id', ID,
            sa.ForeignKey('users.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('expire', TIMESTAMP, nullable=False),
    )
    op.create_index('ix_sessions_expire', 'sessions', ['expire'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('sessions')
    op.drop_table('blog_posts')
    op.drop_table('contact_requests')
    op.drop_table('maintenance_requests')
    op.drop_table('fee_payments')
    op.drop_table('flats')
    op.drop_table('residents')
    op.drop_table('buildings')
    op.drop_table('users')
