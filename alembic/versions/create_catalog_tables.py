"""Create catalog tables

Revision ID: create_catalog_tables
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = 'create_catalog_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


quantity_type = sa.Enum('weight', 'volume', name='quantitytype')


def upgrade() -> None:
    is_postgres = op.get_bind().dialect.name == 'postgresql'
    if is_postgres:
        # fuzzy name search
        op.execute('CREATE EXTENSION IF NOT EXISTS pg_trgm')

    op.create_table(
        'product_image',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('data', sa.LargeBinary(), nullable=False),
        sa.Column('content_type', sa.String(length=32), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_product_image_id'), 'product_image', ['id'], unique=False)

    op.create_table(
        'nutrients',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('kcal', sa.Float(), nullable=False),
        sa.Column('protein_grams', sa.Float(), nullable=True),
        sa.Column('fat_grams', sa.Float(), nullable=True),
        sa.Column('carbohydrates_grams', sa.Float(), nullable=True),
        sa.Column('sugar_grams', sa.Float(), nullable=True),
        sa.Column('salt_grams', sa.Float(), nullable=True),
        sa.Column('vitamin_a_mg', sa.Float(), nullable=True),
        sa.Column('vitamin_c_mg', sa.Float(), nullable=True),
        sa.Column('vitamin_d_mug', sa.Float(), nullable=True),
        sa.Column('iron_mg', sa.Float(), nullable=True),
        sa.Column('calcium_mg', sa.Float(), nullable=True),
        sa.Column('magnesium_mg', sa.Float(), nullable=True),
        sa.Column('sodium_mg', sa.Float(), nullable=True),
        sa.Column('zinc_mg', sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_nutrients_id'), 'nutrients', ['id'], unique=False)

    op.create_table(
        'reported_missing_products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.String(length=64), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_reported_missing_products_id'), 'reported_missing_products', ['id'], unique=False)
    op.create_index(op.f('ix_reported_missing_products_product_id'), 'reported_missing_products', ['product_id'], unique=False)

    op.create_table(
        'product_description',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('producer', sa.String(length=64), nullable=True),
        sa.Column('quantity_type', quantity_type, nullable=False),
        sa.Column('portion', sa.Float(), nullable=False),
        sa.Column('volume_weight_ratio', sa.Float(), nullable=True),
        sa.Column('preview_id', sa.Integer(), nullable=True),
        sa.Column('full_image_id', sa.Integer(), nullable=True),
        sa.Column('nutrients_id', sa.Integer(), nullable=False),
        sa.CheckConstraint('portion > 0', name='ck_product_description_portion_positive'),
        sa.CheckConstraint(
            "(quantity_type = 'volume' AND volume_weight_ratio IS NOT NULL)"
            " OR (quantity_type = 'weight' AND volume_weight_ratio IS NULL)",
            name='ck_product_description_volume_weight_ratio',
        ),
        sa.ForeignKeyConstraint(['preview_id'], ['product_image.id']),
        sa.ForeignKeyConstraint(['full_image_id'], ['product_image.id']),
        sa.ForeignKeyConstraint(['nutrients_id'], ['nutrients.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('preview_id'),
        sa.UniqueConstraint('full_image_id'),
        sa.UniqueConstraint('nutrients_id'),
    )
    op.create_index(op.f('ix_product_description_id'), 'product_description', ['id'], unique=False)
    op.create_index(op.f('ix_product_description_product_id'), 'product_description', ['product_id'], unique=False)
    op.create_index(op.f('ix_product_description_name'), 'product_description', ['name'], unique=False)
    if is_postgres:
        op.execute(
            'CREATE INDEX IF NOT EXISTS product_description_name_trgm_idx '
            'ON product_description USING gist (name gist_trgm_ops)'
        )

    op.create_table(
        'products',
        sa.Column('product_id', sa.String(length=64), nullable=False),
        sa.Column('product_description_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['product_description_id'], ['product_description.id']),
        sa.PrimaryKeyConstraint('product_id'),
        sa.UniqueConstraint('product_description_id'),
    )

    op.create_table(
        'requested_products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_description_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['product_description_id'], ['product_description.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('product_description_id'),
    )
    op.create_index(op.f('ix_requested_products_id'), 'requested_products', ['id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_requested_products_id'), table_name='requested_products')
    op.drop_table('requested_products')
    op.drop_table('products')
    if op.get_bind().dialect.name == 'postgresql':
        op.execute('DROP INDEX IF EXISTS product_description_name_trgm_idx')
    op.drop_index(op.f('ix_product_description_name'), table_name='product_description')
    op.drop_index(op.f('ix_product_description_product_id'), table_name='product_description')
    op.drop_index(op.f('ix_product_description_id'), table_name='product_description')
    op.drop_table('product_description')
    quantity_type.drop(op.get_bind(), checkfirst=True)
    op.drop_index(op.f('ix_reported_missing_products_product_id'), table_name='reported_missing_products')
    op.drop_index(op.f('ix_reported_missing_products_id'), table_name='reported_missing_products')
    op.drop_table('reported_missing_products')
    op.drop_index(op.f('ix_nutrients_id'), table_name='nutrients')
    op.drop_table('nutrients')
    op.drop_index(op.f('ix_product_image_id'), table_name='product_image')
    op.drop_table('product_image')
