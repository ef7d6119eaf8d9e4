"""Create businesses, business_updates and generated_pages

Revision ID: 0001_initial_pages_schema
Revises:
Create Date: 2026-10-17

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial_pages_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'businesses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('primary_category', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('address_street', sa.String(length=255), nullable=True),
        sa.Column('address_city', sa.String(length=100), nullable=False),
        sa.Column('address_state', sa.String(length=50), nullable=False),
        sa.Column('zip_code', sa.String(length=20), nullable=True),
        sa.Column('country', sa.String(length=10), nullable=False, server_default='US'),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('website', sa.Text(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('hours', sa.Text(), nullable=True),
        sa.Column('base_hours', sa.JSON(), nullable=True),
        sa.Column('structured_hours', sa.JSON(), nullable=True),
        sa.Column('price_positioning', sa.String(length=20), nullable=True),
        sa.Column('established_year', sa.Integer(), nullable=True),
        sa.Column('specialties', sa.JSON(), nullable=True),
        sa.Column('services', sa.JSON(), nullable=True),
        sa.Column('payment_methods', sa.JSON(), nullable=True),
        sa.Column('accessibility_features', sa.JSON(), nullable=True),
        sa.Column('languages_spoken', sa.JSON(), nullable=True),
        sa.Column('parking_info', sa.JSON(), nullable=True),
        sa.Column('service_area', sa.Text(), nullable=True),
        sa.Column('service_area_details', sa.JSON(), nullable=True),
        sa.Column('awards', sa.JSON(), nullable=True),
        sa.Column('certifications', sa.JSON(), nullable=True),
        sa.Column('social_media', sa.JSON(), nullable=True),
        sa.Column('review_summary', sa.JSON(), nullable=True),
        sa.Column('business_faqs', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_businesses_id'), 'businesses', ['id'], unique=False)
    op.create_index(op.f('ix_businesses_email'), 'businesses', ['email'], unique=True)
    op.create_index(op.f('ix_businesses_slug'), 'businesses', ['slug'], unique=False)

    op.create_table(
        'business_updates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('business_id', sa.Integer(), nullable=False),
        sa.Column('content_text', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('starts_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.Column('deal_terms', sa.Text(), nullable=True),
        sa.Column('update_category', sa.String(length=50), nullable=True),
        sa.Column('special_hours', sa.Text(), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('processing_time_ms', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_business_updates_id'), 'business_updates', ['id'], unique=False)
    op.create_index(op.f('ix_business_updates_business_id'), 'business_updates', ['business_id'], unique=False)
    op.create_index(op.f('ix_business_updates_status'), 'business_updates', ['status'], unique=False)

    op.create_table(
        'generated_pages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('business_id', sa.Integer(), nullable=False),
        sa.Column('update_id', sa.Integer(), nullable=True),
        sa.Column('file_path', sa.String(length=500), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('page_type', sa.String(length=20), nullable=False, server_default='update'),
        sa.Column('intent_type', sa.String(length=30), nullable=True),
        sa.Column('page_variant', sa.String(length=100), nullable=True),
        sa.Column('generation_batch_id', sa.String(length=36), nullable=True),
        sa.Column('page_data', sa.JSON(), nullable=True),
        sa.Column('discoverability_score', sa.Integer(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.Column('expired_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['business_id'], ['businesses.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['update_id'], ['business_updates.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_generated_pages_id'), 'generated_pages', ['id'], unique=False)
    op.create_index(op.f('ix_generated_pages_business_id'), 'generated_pages', ['business_id'], unique=False)
    op.create_index(op.f('ix_generated_pages_update_id'), 'generated_pages', ['update_id'], unique=False)
    op.create_index(op.f('ix_generated_pages_file_path'), 'generated_pages', ['file_path'], unique=False)
    op.create_index(op.f('ix_generated_pages_generation_batch_id'), 'generated_pages', ['generation_batch_id'], unique=False)
    op.create_index(op.f('ix_generated_pages_expires_at'), 'generated_pages', ['expires_at'], unique=False)
    op.create_index(op.f('ix_generated_pages_created_at'), 'generated_pages', ['created_at'], unique=False)
    # At most one permanent profile page per business
    op.create_index(
        'uq_generated_pages_business_profile',
        'generated_pages',
        ['business_id'],
        unique=True,
        postgresql_where=sa.text("page_type = 'business'"),
        sqlite_where=sa.text("page_type = 'business'"),
    )


def downgrade() -> None:
    op.drop_index('uq_generated_pages_business_profile', table_name='generated_pages')
    op.drop_index(op.f('ix_generated_pages_created_at'), table_name='generated_pages')
    op.drop_index(op.f('ix_generated_pages_expires_at'), table_name='generated_pages')
    op.drop_index(op.f('ix_generated_pages_generation_batch_id'), table_name='generated_pages')
    op.drop_index(op.f('ix_generated_pages_file_path'), table_name='generated_pages')
    op.drop_index(op.f('ix_generated_pages_update_id'), table_name='generated_pages')
    op.drop_index(op.f('ix_generated_pages_business_id'), table_name='generated_pages')
    op.drop_index(op.f('ix_generated_pages_id'), table_name='generated_pages')
    op.drop_table('generated_pages')

    op.drop_index(op.f('ix_business_updates_status'), table_name='business_updates')
    op.drop_index(op.f('ix_business_updates_business_id'), table_name='business_updates')
    op.drop_index(op.f('ix_business_updates_id'), table_name='business_updates')
    op.drop_table('business_updates')

    op.drop_index(op.f('ix_businesses_slug'), table_name='businesses')
    op.drop_index(op.f('ix_businesses_email'), table_name='businesses')
    op.drop_index(op.f('ix_businesses_id'), table_name='businesses')
    op.drop_table('businesses')
