"""create document collections

Revision ID: 3a7c9e1f5b20
Revises:
Create Date: 2026-10-19 10:12:44.301517

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3a7c9e1f5b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

COLLECTIONS = ('playgrounds', 'users', 'events', 'messages')


def _document_type():
    return sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql')


def _collection(name: str, *extra: sa.Column) -> None:
    op.create_table(
        name,
        sa.Column('key', sa.String(), nullable=False),
        sa.Column('document', _document_type(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        *extra,
        sa.PrimaryKeyConstraint('key'),
    )


def upgrade() -> None:
    """Upgrade schema."""
    _collection('playgrounds')
    _collection('users')
    _collection('events', sa.Column('owner_key', sa.String(), nullable=True))
    _collection(
        'messages',
        sa.Column('owner_key', sa.String(), nullable=True),
        sa.Column('author_key', sa.String(), nullable=True),
    )
    op.create_index(op.f('ix_events_owner_key'), 'events', ['owner_key'], unique=False)
    op.create_index(op.f('ix_messages_owner_key'), 'messages', ['owner_key'], unique=False)
    op.create_index(op.f('ix_messages_author_key'), 'messages', ['author_key'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_messages_author_key'), table_name='messages')
    op.drop_index(op.f('ix_messages_owner_key'), table_name='messages')
    op.drop_index(op.f('ix_events_owner_key'), table_name='events')
    for name in reversed(COLLECTIONS):
        op.drop_table(name)
