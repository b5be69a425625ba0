"""initial schema: users, games, choices, comments, likes, refresh tokens

Revision ID: 3f1b9c2d7a10
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '3f1b9c2d7a10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(*, with_updated: bool = True) -> list[sa.Column]:
    cols = [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]
    if with_updated:
        cols.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
        )
    return cols


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column(
            'role',
            sa.Enum('USER', 'ADMIN', name='user_role', native_enum=False, length=16),
            nullable=False,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )

    op.create_table(
        'games',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_games')),
    )

    op.create_table(
        'choices',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.String(length=200), nullable=False),
        sa.ForeignKeyConstraint(
            ['game_id'], ['games.id'], name=op.f('fk_choices_game_id_games'), ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_choices')),
    )
    op.create_index('ix_choices_game_id', 'choices', ['game_id'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.String(length=500), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['game_id'], ['games.id'], name=op.f('fk_comments_game_id_games'), ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['author_id'], ['users.id'], name=op.f('fk_comments_author_id_users'), ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_comments')),
    )
    op.create_index('ix_comments_game_id', 'comments', ['game_id'])
    op.create_index('ix_comments_author_id', 'comments', ['author_id'])

    op.create_table(
        'choice_likes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('choice_id', sa.Integer(), nullable=False),
        *_timestamps(with_updated=False),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'], name=op.f('fk_choice_likes_user_id_users'), ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['choice_id'], ['choices.id'], name=op.f('fk_choice_likes_choice_id_choices'), ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_choice_likes')),
        sa.UniqueConstraint('user_id', 'choice_id', name='uq_choice_likes_user_choice'),
    )

    op.create_table(
        'comment_likes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('comment_id', sa.Integer(), nullable=False),
        *_timestamps(with_updated=False),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'], name=op.f('fk_comment_likes_user_id_users'), ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['comment_id'], ['comments.id'], name=op.f('fk_comment_likes_comment_id_comments'), ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_comment_likes')),
        sa.UniqueConstraint('user_id', 'comment_id', name='uq_comment_likes_user_comment'),
    )

    op.create_table(
        'refresh_tokens',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_email', sa.String(length=254), nullable=False),
        sa.Column('token', sa.String(length=2048), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_refresh_tokens')),
        sa.UniqueConstraint('owner_email', name='uq_refresh_tokens_owner_email'),
        sa.UniqueConstraint('token', name='uq_refresh_tokens_token'),
    )


def downgrade():
    op.drop_table('refresh_tokens')
    op.drop_table('comment_likes')
    op.drop_table('choice_likes')
    op.drop_index('ix_comments_author_id', table_name='comments')
    op.drop_index('ix_comments_game_id', table_name='comments')
    op.drop_table('comments')
    op.drop_index('ix_choices_game_id', table_name='choices')
    op.drop_table('choices')
    op.drop_table('games')
    op.drop_table('users')
