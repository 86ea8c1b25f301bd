"""create breeds, stations and station breed rules

Revision ID: 5e2a9c71d4b0
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5e2a9c71d4b0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'breeds',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('size_class', sa.String(length=32), nullable=True),
        sa.Column('min_groom_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('max_groom_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('hourly_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_breeds_name', 'breeds', ['name'], unique=False)

    op.create_table(
        'stations',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('base_time_minutes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_stations_display_order', 'stations', ['display_order'], unique=False)

    op.create_table(
        'station_breed_rules',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('station_id', sa.Uuid(), sa.ForeignKey('stations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('breed_id', sa.Uuid(), sa.ForeignKey('breeds.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('remote_booking_allowed', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('requires_staff_approval', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('duration_modifier_minutes', sa.Integer(), nullable=True),
        sa.UniqueConstraint('station_id', 'breed_id', name='ux_station_breed_rules_station_breed'),
    )
    op.create_index('ix_station_breed_rules_station_id', 'station_breed_rules', ['station_id'], unique=False)
    op.create_index('ix_station_breed_rules_breed_id', 'station_breed_rules', ['breed_id'], unique=False)

    op.create_table(
        'dog_categories',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False, unique=True),
    )
    op.create_table(
        'breed_dog_categories',
        sa.Column('breed_id', sa.Uuid(), sa.ForeignKey('breeds.id', ondelete='CASCADE'), primary_key=True),
        sa.Column(
            'dog_category_id', sa.Uuid(), sa.ForeignKey('dog_categories.id', ondelete='CASCADE'), primary_key=True
        ),
    )

    op.create_table(
        'station_working_hours',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('station_id', sa.Uuid(), sa.ForeignKey('stations.id', ondelete='CASCADE'), nullable=False),
        sa.Column('weekday', sa.SmallInteger(), nullable=False),
        sa.Column('open_time', sa.Time(), nullable=False),
        sa.Column('close_time', sa.Time(), nullable=False),
        sa.Column('shift_order', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_station_working_hours_station_id', 'station_working_hours', ['station_id'], unique=False)

    op.create_table(
        'grooming_appointments',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('station_id', sa.Uuid(), sa.ForeignKey('stations.id', ondelete='SET NULL'), nullable=True),
        sa.Column('start_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('series_id', sa.String(length=64), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_index('ix_grooming_appointments_station_id', 'grooming_appointments', ['station_id'], unique=False)
    op.create_index('ix_grooming_appointments_series_id', 'grooming_appointments', ['series_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_grooming_appointments_series_id', table_name='grooming_appointments')
    op.drop_index('ix_grooming_appointments_station_id', table_name='grooming_appointments')
    op.drop_table('grooming_appointments')
    op.drop_index('ix_station_working_hours_station_id', table_name='station_working_hours')
    op.drop_table('station_working_hours')
    op.drop_table('breed_dog_categories')
    op.drop_table('dog_categories')
    op.drop_index('ix_station_breed_rules_breed_id', table_name='station_breed_rules')
    op.drop_index('ix_station_breed_rules_station_id', table_name='station_breed_rules')
    op.drop_table('station_breed_rules')
    op.drop_index('ix_stations_display_order', table_name='stations')
    op.drop_table('stations')
    op.drop_index('ix_breeds_name', table_name='breeds')
    op.drop_table('breeds')
