"""create game and player tables

Revision ID: 4c2a9e71b0d3
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c2a9e71b0d3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'game',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_code', sa.String(length=4), nullable=True),
        sa.Column('status', sa.String(length=64), nullable=False),
        sa.Column('target_score', sa.Integer(), nullable=False),
        sa.Column('sizer_a', sa.Integer(), nullable=False),
        sa.Column('sizer_b', sa.Integer(), nullable=False),
        sa.Column('cohort', sa.String(length=255), nullable=False),
        sa.Column('item', sa.String(length=255), nullable=False),
        sa.Column('estimates', sa.Text(), nullable=True),
        sa.Column('round_number', sa.Integer(), nullable=False),
        sa.Column('round_history', sa.Text(), nullable=True),
        sa.Column('oracle_answer', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('game') as batch_op:
        batch_op.create_index(batch_op.f('ix_game_game_code'), ['game_code'], unique=True)

    op.create_table(
        'player',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('seat', sa.Integer(), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['game_id'], ['game.id']),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade():
    op.drop_table('player')
    with op.batch_alter_table('game') as batch_op:
        batch_op.drop_index(batch_op.f('ix_game_game_code'))
    op.drop_table('game')
