"""staged and canonical show tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

NATURAL_KEY = ['movie_id', 'cinema_id', 'screen_name', 'show_time']


def _show_columns() -> list[sa.Column]:
    return [
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.String(length=100), nullable=False),
        sa.Column('cinema_id', sa.Integer(), nullable=False),
        sa.Column('screen_name', sa.String(length=200), nullable=False),
        sa.Column('show_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('rating', sa.String(length=50), nullable=True),
        sa.Column('length', sa.Integer(), nullable=True),
        sa.Column('format', sa.String(length=100), nullable=True),
        sa.Column('genre', sa.String(length=200), nullable=True),
        sa.Column('is_active', sa.String(length=20), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    # Staging buffer: latest raw snapshot per natural key
    op.create_table(
        'staged_shows',
        *_show_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(*NATURAL_KEY, name='uq_staged_show_natural_key'),
    )
    op.create_index(op.f('ix_staged_shows_cinema_id'), 'staged_shows', ['cinema_id'], unique=False)
    op.create_index(op.f('ix_staged_shows_show_time'), 'staged_shows', ['show_time'], unique=False)

    # Canonical read-side table
    op.create_table(
        'canonical_shows',
        *_show_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(*NATURAL_KEY, name='uq_canonical_show_natural_key'),
    )
    op.create_index(op.f('ix_canonical_shows_cinema_id'), 'canonical_shows', ['cinema_id'], unique=False)
    op.create_index(op.f('ix_canonical_shows_show_time'), 'canonical_shows', ['show_time'], unique=False)


def downgrade() -> None:
    op.drop_table('canonical_shows')
    op.drop_table('staged_shows')
