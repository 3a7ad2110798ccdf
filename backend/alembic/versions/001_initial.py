"""Initial migration - create all tables

Revision ID: 001_initial
Revises:
Create Date: 2026-01-14

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('strava_athlete_id', sa.BigInteger(), unique=True, nullable=True),
        sa.Column('strava_access_token', sa.Text(), nullable=True),
        sa.Column('strava_refresh_token', sa.Text(), nullable=True),
        sa.Column('token_expires_at', sa.DateTime(), nullable=True),
        sa.Column('connected_at', sa.DateTime(), nullable=True),
        sa.Column('last_synced_at', sa.DateTime(), nullable=True),
        sa.Column('first_name', sa.String(100), nullable=False, server_default=''),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('profile_picture_url', sa.Text(), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_last_synced_at', 'users', ['last_synced_at'])

    # Create activities table
    op.create_table(
        'activities',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'user_id', sa.String(255),
            sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('strava_activity_id', sa.BigInteger(), unique=True, nullable=False),
        sa.Column('activity_type', sa.String(50), nullable=False),
        sa.Column('activity_date', sa.DateTime(), nullable=False),
        sa.Column('distance_meters', sa.Float(), nullable=False),
        sa.Column('distance_miles', sa.Float(), nullable=False),
        sa.Column('moving_time_seconds', sa.Integer(), nullable=True),
        sa.Column('elapsed_time_seconds', sa.Integer(), nullable=True),
        sa.Column('total_elevation_gain', sa.Float(), nullable=True),
        sa.Column('average_speed', sa.Float(), nullable=True),
        sa.Column('max_speed', sa.Float(), nullable=True),
        sa.Column('average_heartrate', sa.Float(), nullable=True),
        sa.Column('max_heartrate', sa.Float(), nullable=True),
        sa.Column('start_latitude', sa.Float(), nullable=True),
        sa.Column('start_longitude', sa.Float(), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('in_dc_region', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_manual', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('synced_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_activities_user_id', 'activities', ['user_id'])
    op.create_index('ix_activities_activity_date', 'activities', ['activity_date'])
    op.create_index('ix_activities_in_dc_region', 'activities', ['in_dc_region'])

    # Create mileage_summaries table
    op.create_table(
        'mileage_summaries',
        sa.Column(
            'user_id', sa.String(255),
            sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True
        ),
        sa.Column('current_month_miles', sa.Float(), nullable=False),
        sa.Column('last_month_miles', sa.Float(), nullable=False),
        sa.Column('current_year_miles', sa.Float(), nullable=False),
        sa.Column('total_miles', sa.Float(), nullable=False),
        sa.Column('total_activities', sa.Integer(), nullable=False),
        sa.Column('dc_activities', sa.Integer(), nullable=False),
        sa.Column('last_activity_date', sa.DateTime(), nullable=True),
        sa.Column('access_tier', sa.String(20), nullable=False, server_default='none'),
        sa.Column('last_calculated_at', sa.DateTime(), nullable=True),
    )
    op.create_index(
        'ix_mileage_summaries_current_month_miles',
        'mileage_summaries', ['current_month_miles']
    )
    op.create_index(
        'ix_mileage_summaries_last_calculated_at',
        'mileage_summaries', ['last_calculated_at']
    )

    # Create drops table
    op.create_table(
        'drops',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('release_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('required_miles_basic', sa.Float(), nullable=False, server_default='50'),
        sa.Column('required_miles_premium', sa.Float(), nullable=False, server_default='100'),
        sa.Column('required_miles_exclusive', sa.Float(), nullable=False, server_default='150'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('total_pieces', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_drops_slug', 'drops', ['slug'], unique=True)
    op.create_index('ix_drops_is_published', 'drops', ['is_published'])

    # Create drop_access table
    op.create_table(
        'drop_access',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'drop_id', sa.String(36),
            sa.ForeignKey('drops.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column(
            'user_id', sa.String(255),
            sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('access_tier', sa.String(20), nullable=False),
        sa.Column('mileage_at_qualification', sa.Float(), nullable=False),
        sa.Column('qualified_at', sa.DateTime(), nullable=True),
        sa.Column('notified_at', sa.DateTime(), nullable=True),
        sa.Column('first_viewed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('drop_id', 'user_id', name='uq_drop_access_drop_user'),
        sa.CheckConstraint(
            "access_tier IN ('basic', 'premium', 'exclusive')",
            name='ck_drop_access_tier'
        ),
    )
    op.create_index('ix_drop_access_drop_id', 'drop_access', ['drop_id'])
    op.create_index('ix_drop_access_user_id', 'drop_access', ['user_id'])


def downgrade() -> None:
    op.drop_table('drop_access')
    op.drop_table('drops')
    op.drop_table('mileage_summaries')
    op.drop_table('activities')
    op.drop_table('users')
