"""add_puzzle_packs

Revision ID: 8b2e5d61c9f3
Revises: 3f1c9a2b7d40
Create Date: 2026-10-19 16:40:27.903114

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b2e5d61c9f3'
down_revision: Union[str, Sequence[str], None] = '3f1c9a2b7d40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('puzzle_packs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category_type', sa.String(50), nullable=False),
        sa.Column('category_value', sa.String(50), nullable=True),
        sa.Column('price_usd', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('is_subscription', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('puzzle_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('cover_image_url', sa.String(500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_puzzle_packs_id', 'puzzle_packs', ['id'])
    op.create_index('ix_puzzle_packs_category_type', 'puzzle_packs', ['category_type'])
    op.create_index('ix_puzzle_packs_category_value', 'puzzle_packs', ['category_value'])
    op.create_index('ix_puzzle_packs_is_active', 'puzzle_packs', ['is_active'])

    # Batch mode so SQLite can add the foreign key
    with op.batch_alter_table('puzzles') as batch_op:
        batch_op.add_column(sa.Column('puzzle_pack_id', sa.Integer(), nullable=True))
        batch_op.create_index('ix_puzzles_puzzle_pack_id', ['puzzle_pack_id'])
        batch_op.create_foreign_key(
            'fk_puzzles_puzzle_pack_id', 'puzzle_packs',
            ['puzzle_pack_id'], ['id'], ondelete='SET NULL'
        )


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table('puzzles') as batch_op:
        batch_op.drop_constraint('fk_puzzles_puzzle_pack_id', type_='foreignkey')
        batch_op.drop_index('ix_puzzles_puzzle_pack_id')
        batch_op.drop_column('puzzle_pack_id')

    op.drop_table('puzzle_packs')
