"""initial_schema

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-19 10:12:03.418225

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('is_guest', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table('user_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('display_name', sa.String(100), nullable=True),
        sa.Column('avatar_url', sa.String(500), nullable=True),
        sa.Column('total_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('puzzles_completed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('current_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('longest_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_puzzle_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('music_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('music_volume', sa.Integer(), nullable=False, server_default='70'),
        sa.Column('difficulty_preference', sa.String(20), nullable=False, server_default='beginner'),
        sa.Column('theme', sa.String(20), nullable=False, server_default='dark'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id')
    )
    op.create_index('ix_user_profiles_id', 'user_profiles', ['id'])

    op.create_table('puzzles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('grid_data_json', sa.Text(), nullable=False),
        sa.Column('clues_across_json', sa.Text(), nullable=False),
        sa.Column('clues_down_json', sa.Text(), nullable=False),
        sa.Column('difficulty', sa.String(20), nullable=False, server_default='beginner'),
        sa.Column('decade', sa.String(10), nullable=True),
        sa.Column('region', sa.String(50), nullable=True),
        sa.Column('subgenre', sa.String(50), nullable=True),
        sa.Column('estimated_time', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('base_points', sa.Integer(), nullable=False, server_default='100'),
        sa.Column('is_daily_challenge', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('daily_challenge_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('daily_challenge_date')
    )
    op.create_index('ix_puzzles_id', 'puzzles', ['id'])
    op.create_index('ix_puzzles_difficulty', 'puzzles', ['difficulty'])
    op.create_index('ix_puzzles_decade', 'puzzles', ['decade'])
    op.create_index('ix_puzzles_region', 'puzzles', ['region'])
    op.create_index('ix_puzzles_is_daily_challenge', 'puzzles', ['is_daily_challenge'])

    op.create_table('puzzle_attempts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('puzzle_id', sa.Integer(), nullable=False),
        sa.Column('current_state_json', sa.Text(), nullable=True),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completion_time', sa.Integer(), nullable=True),
        sa.Column('hints_used', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('points_earned', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('accuracy_percentage', sa.Numeric(5, 2), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['puzzle_id'], ['puzzles.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'puzzle_id', name='uq_user_puzzle')
    )
    op.create_index('ix_puzzle_attempts_id', 'puzzle_attempts', ['id'])
    op.create_index('ix_puzzle_attempts_user_id', 'puzzle_attempts', ['user_id'])
    op.create_index('ix_puzzle_attempts_puzzle_id', 'puzzle_attempts', ['puzzle_id'])
    op.create_index('ix_puzzle_attempts_is_completed', 'puzzle_attempts', ['is_completed'])
    op.create_index('ix_puzzle_attempts_points_earned', 'puzzle_attempts', ['points_earned'])
    op.create_index('ix_puzzle_attempts_completed_at', 'puzzle_attempts', ['completed_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('puzzle_attempts')
    op.drop_table('puzzles')
    op.drop_table('user_profiles')
    op.drop_table('users')
