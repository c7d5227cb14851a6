"""Initial dispatch schema

Revision ID: 4f2c9a7e1b30
Revises: 
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f2c9a7e1b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns():
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Reference data
    op.create_table(
        'customers',
        *_base_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'service_locations',
        *_base_columns(),
        sa.Column('customer_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_service_locations_customer_id', 'service_locations', ['customer_id'])

    op.create_table(
        'products',
        *_base_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('default_price', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('stock_total', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('track_inventory', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'product_items',
        *_base_columns(),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('item_code', sa.String(length=64), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='available'),
        sa.Column('attributes', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_product_items_product_id', 'product_items', ['product_id'])

    op.create_table(
        'service_catalog',
        *_base_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('service_code', sa.String(length=64), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('pricing_method', sa.String(length=32), nullable=False, server_default='per_visit'),
        sa.Column('per_visit_cost', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('per_hour_cost', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('flat_rate_cost', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('estimated_duration_hours', sa.Numeric(6, 2), nullable=False, server_default='1'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'drivers',
        *_base_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'vehicles',
        *_base_columns(),
        sa.Column('license_plate', sa.String(length=32), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'company_settings',
        *_base_columns(),
        sa.Column('company_name', sa.String(length=255), nullable=True),
        sa.Column('delivery_prefix', sa.String(length=16), nullable=True),
        sa.Column('pickup_prefix', sa.String(length=16), nullable=True),
        sa.Column('service_prefix', sa.String(length=16), nullable=True),
        sa.Column('survey_prefix', sa.String(length=16), nullable=True),
        sa.Column('quote_prefix', sa.String(length=16), nullable=True),
        sa.Column('next_delivery_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('next_pickup_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('next_service_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('next_survey_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('next_quote_number', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id')
    )

    # Jobs
    op.create_table(
        'jobs',
        *_base_columns(),
        sa.Column('job_number', sa.String(length=32), nullable=False),
        sa.Column('job_type', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='assigned'),
        sa.Column('customer_id', sa.String(length=64), nullable=False),
        sa.Column('contact_id', sa.String(length=64), nullable=True),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('scheduled_time', sa.String(length=5), nullable=True),
        sa.Column('timezone', sa.String(length=64), nullable=False),
        sa.Column('return_date', sa.Date(), nullable=True),
        sa.Column('driver_id', sa.String(length=64), nullable=True),
        sa.Column('vehicle_id', sa.String(length=64), nullable=True),
        sa.Column('service_location_id', sa.String(length=64), nullable=True),
        sa.Column('location_address', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('special_instructions', sa.Text(), nullable=True),
        sa.Column('is_priority', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_service_job', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('total_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('parent_job_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['parent_job_id'], ['jobs.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_jobs_job_number', 'jobs', ['job_number'], unique=True)
    op.create_index('ix_jobs_job_type', 'jobs', ['job_type'])
    op.create_index('ix_jobs_status', 'jobs', ['status'])
    op.create_index('ix_jobs_customer_id', 'jobs', ['customer_id'])
    op.create_index('ix_jobs_scheduled_date', 'jobs', ['scheduled_date'])
    op.create_index('ix_jobs_driver_id', 'jobs', ['driver_id'])
    op.create_index('ix_jobs_vehicle_id', 'jobs', ['vehicle_id'])
    op.create_index('ix_jobs_parent_job_id', 'jobs', ['parent_job_id'])

    op.create_table(
        'equipment_assignments',
        *_base_columns(),
        sa.Column('job_id', sa.Uuid(), nullable=False),
        sa.Column('product_id', sa.String(length=64), nullable=False),
        sa.Column('product_item_id', sa.String(length=64), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('strategy', sa.String(length=16), nullable=False, server_default='bulk'),
        sa.Column('assigned_date', sa.Date(), nullable=False),
        sa.Column('return_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='assigned'),
        sa.Column('attributes', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_equipment_assignments_job_id', 'equipment_assignments', ['job_id'])
    op.create_index('ix_equipment_assignments_product_id', 'equipment_assignments', ['product_id'])
    op.create_index('ix_equipment_assignments_product_item_id', 'equipment_assignments', ['product_item_id'])
    op.create_index('ix_equipment_assignments_assigned_date', 'equipment_assignments', ['assigned_date'])
    op.create_index('ix_equipment_assignments_return_date', 'equipment_assignments', ['return_date'])

    op.create_table(
        'job_service_items',
        *_base_columns(),
        sa.Column('job_id', sa.Uuid(), nullable=False),
        sa.Column('service_id', sa.String(length=64), nullable=False),
        sa.Column('service_name', sa.String(length=255), nullable=False),
        sa.Column('pricing_method', sa.String(length=32), nullable=False),
        sa.Column('frequency_descriptor', sa.JSON(), nullable=False),
        sa.Column('visit_dates', sa.JSON(), nullable=False),
        sa.Column('visit_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('unit_rate', sa.Numeric(10, 2), nullable=False),
        sa.Column('computed_total', sa.Numeric(10, 2), nullable=False),
        sa.Column('total', sa.Numeric(10, 2), nullable=False),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_job_service_items_job_id', 'job_service_items', ['job_id'])
    op.create_index('ix_job_service_items_service_id', 'job_service_items', ['service_id'])

    op.create_table(
        'daily_assignments',
        *_base_columns(),
        sa.Column('assignment_date', sa.Date(), nullable=False),
        sa.Column('driver_id', sa.String(length=64), nullable=False),
        sa.Column('vehicle_id', sa.String(length=64), nullable=False),
        sa.Column('job_id', sa.Uuid(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_daily_assignments_assignment_date', 'daily_assignments', ['assignment_date'])
    op.create_index('ix_daily_assignments_date_driver', 'daily_assignments', ['assignment_date', 'driver_id'])
    op.create_index('ix_daily_assignments_date_vehicle', 'daily_assignments', ['assignment_date', 'vehicle_id'])

    # Quotes
    op.create_table(
        'quotes',
        *_base_columns(),
        sa.Column('quote_number', sa.String(length=32), nullable=False),
        sa.Column('customer_id', sa.String(length=64), nullable=False),
        sa.Column('job_id', sa.Uuid(), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='draft'),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_quotes_quote_number', 'quotes', ['quote_number'], unique=True)
    op.create_index('ix_quotes_customer_id', 'quotes', ['customer_id'])
    op.create_index('ix_quotes_job_id', 'quotes', ['job_id'])

    op.create_table(
        'quote_items',
        *_base_columns(),
        sa.Column('quote_id', sa.Uuid(), nullable=False),
        sa.Column('line_item_type', sa.String(length=16), nullable=False),
        sa.Column('product_id', sa.String(length=64), nullable=True),
        sa.Column('service_id', sa.String(length=64), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('line_total', sa.Numeric(10, 2), nullable=False),
        sa.Column('rental_start_date', sa.Date(), nullable=True),
        sa.Column('rental_end_date', sa.Date(), nullable=True),
        sa.Column('service_frequency', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['quote_id'], ['quotes.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_quote_items_quote_id', 'quote_items', ['quote_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('quote_items')
    op.drop_table('quotes')
    op.drop_table('daily_assignments')
    op.drop_table('job_service_items')
    op.drop_table('equipment_assignments')
    op.drop_table('jobs')
    op.drop_table('company_settings')
    op.drop_table('vehicles')
    op.drop_table('drivers')
    op.drop_table('service_catalog')
    op.drop_table('product_items')
    op.drop_table('products')
    op.drop_table('service_locations')
    op.drop_table('customers')
