"""create users, translations, summaries

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=64), nullable=False, comment='ログインID'),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'translations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('original_text', sa.Text(), nullable=False),
        sa.Column('japanese', sa.Text(), nullable=True),
        sa.Column('english', sa.Text(), nullable=True),
        sa.Column('romaji', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, comment='TIMEZONE基準'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_translations_user_id', 'translations', ['user_id'])
    op.create_index('ix_translations_created_at', 'translations', ['created_at'])
    op.create_table(
        'summaries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False, comment='TIMEZONE基準'),
        sa.Column('content', sa.Text(), nullable=False, comment='Markdown本文'),
        sa.Column('vocab', sa.JSON(), nullable=True, comment='[{word, reading, meaning}] または文字列のリスト'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_summaries_user_id', 'summaries', ['user_id'])
    op.create_index('ix_summaries_date', 'summaries', ['date'])


def downgrade() -> None:
    op.drop_index('ix_summaries_date', table_name='summaries')
    op.drop_index('ix_summaries_user_id', table_name='summaries')
    op.drop_table('summaries')
    op.drop_index('ix_translations_created_at', table_name='translations')
    op.drop_index('ix_translations_user_id', table_name='translations')
    op.drop_table('translations')
    op.drop_table('users')
