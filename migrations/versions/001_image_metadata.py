"""Image metadata index

Revision ID: 001_image_metadata
Revises:
Create Date: 2026-10-19

This migration:
- Creates image_metadata, the side-index of uploaded images
- storage_key is unique and indexed for lookups during listing
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_image_metadata'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'image_metadata',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('filename', sa.String(512), nullable=False),
        sa.Column('content_type', sa.String(128), nullable=True),
        sa.Column('size', sa.BigInteger, nullable=False),
        sa.Column('storage_key', sa.String(1024), nullable=False),
        sa.Column('url', sa.String(1100), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_image_metadata_storage_key', 'image_metadata', ['storage_key'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_image_metadata_storage_key', table_name='image_metadata')
    op.drop_table('image_metadata')
