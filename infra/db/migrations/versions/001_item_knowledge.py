"""item knowledge cache and grocery entries

Revision ID: 001_item_knowledge
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_item_knowledge'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Learned knowledge, one row per normalized item name
    op.create_table(
        'item_knowledge',
        sa.Column('normalized_name', sa.Text, primary_key=True, comment='Lowercased, trimmed, synonym-folded name'),

        sa.Column('category', sa.Text, nullable=False, comment='Store aisle (Produce, Dairy, ...)'),
        sa.Column('storage_advice', sa.Text),
        sa.Column('shelf_life_days_min', sa.Integer),
        sa.Column('shelf_life_days_max', sa.Integer),

        sa.Column('source', sa.Text, nullable=False, comment='Seed, User or AI'),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('NOW()')),

        sa.CheckConstraint("source IN ('Seed', 'User', 'AI')", name='ck_item_knowledge_source'),
        sa.CheckConstraint('shelf_life_days_min IS NULL OR shelf_life_days_min >= 0', name='ck_item_knowledge_min'),
        sa.CheckConstraint('shelf_life_days_max IS NULL OR shelf_life_days_max >= 0', name='ck_item_knowledge_max'),
    )

    # Grocery list entries
    op.create_table(
        'grocery_entries',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),

        sa.Column('name', sa.Text, nullable=False, comment='Name as entered'),
        sa.Column('normalized_name', sa.Text, nullable=False),
        sa.Column('quantity', sa.Text),
        sa.Column('category', sa.Text, nullable=False),

        sa.Column('storage_advice', sa.Text),
        sa.Column('shelf_life_days_min', sa.Integer),
        sa.Column('shelf_life_days_max', sa.Integer),
        sa.Column('shelf_life_source', sa.Text),

        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('NOW()')),
    )

    op.create_index('idx_grocery_entries_normalized_name', 'grocery_entries', ['normalized_name'])
    op.create_index('idx_grocery_entries_category', 'grocery_entries', ['category'])


def downgrade() -> None:
    op.drop_index('idx_grocery_entries_category', table_name='grocery_entries')
    op.drop_index('idx_grocery_entries_normalized_name', table_name='grocery_entries')
    op.drop_table('grocery_entries')
    op.drop_table('item_knowledge')
