"""Create users, submissions and tracks

Revision ID: 3c5e9a1f7b20
Revises: 
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c5e9a1f7b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('artist', 'admin', name='userrole')
user_status = sa.Enum('active', 'inactive', name='userstatus')
submission_status = sa.Enum('pending', 'in-review', 'approved', 'rejected', name='submissionstatus')


def upgrade() -> None:
    """User directory, submission store and one row per uploaded track"""

    op.create_table('users',
        sa.Column('id', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('display_name', sa.String(), nullable=False),
        sa.Column('phone_number', sa.String(), nullable=True),
        sa.Column('role', user_role, nullable=False),
        sa.Column('status', user_status, server_default='active', nullable=False),

        # Artist profile
        sa.Column('artist_name', sa.String(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('social_media', sa.JSON(), nullable=True),

        # Admin profile
        sa.Column('permissions', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),

        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('last_logout', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)
    op.create_index(op.f('ix_users_status'), 'users', ['status'], unique=False)

    op.create_table('submissions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('artist_id', sa.String(length=128), nullable=False),
        sa.Column('artist_name', sa.String(), nullable=True),
        sa.Column('artist_email', sa.String(), nullable=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', submission_status, server_default='pending', nullable=False),

        # Review
        sa.Column('review_score', sa.Integer(), nullable=True),
        sa.Column('review_notes', sa.Text(), nullable=True),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('reviewed_by', sa.String(length=128), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),

        # Notification history
        sa.Column('feedback', sa.Text(), nullable=True),
        sa.Column('email_sent', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('email_sent_at', sa.DateTime(), nullable=True),
        sa.Column('email_message_id', sa.String(), nullable=True),
        sa.Column('email_method', sa.String(), nullable=True),
        sa.Column('email_error', sa.Text(), nullable=True),

        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['artist_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_submissions_id'), 'submissions', ['id'], unique=False)
    op.create_index(op.f('ix_submissions_artist_id'), 'submissions', ['artist_id'], unique=False)
    op.create_index(op.f('ix_submissions_status'), 'submissions', ['status'], unique=False)
    op.create_index(op.f('ix_submissions_created_at'), 'submissions', ['created_at'], unique=False)

    op.create_table('tracks',
        sa.Column('pk', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('track_id', sa.String(), nullable=False),
        sa.Column('submission_id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('genre', sa.String(), nullable=False),
        sa.Column('bpm', sa.Integer(), nullable=True),
        sa.Column('key', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('filename', sa.String(), nullable=False),
        sa.Column('stored_filename', sa.String(), nullable=False),
        sa.Column('storage_path', sa.String(), nullable=False),
        sa.Column('file_size', sa.BigInteger(), nullable=False),
        sa.Column('mime_type', sa.String(), nullable=True),
        sa.Column('duration', sa.Float(), nullable=True),
        sa.Column('uploaded_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['submission_id'], ['submissions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('pk')
    )
    op.create_index(op.f('ix_tracks_track_id'), 'tracks', ['track_id'], unique=False)
    op.create_index(op.f('ix_tracks_submission_id'), 'tracks', ['submission_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_tracks_submission_id'), table_name='tracks')
    op.drop_index(op.f('ix_tracks_track_id'), table_name='tracks')
    op.drop_table('tracks')

    op.drop_index(op.f('ix_submissions_created_at'), table_name='submissions')
    op.drop_index(op.f('ix_submissions_status'), table_name='submissions')
    op.drop_index(op.f('ix_submissions_artist_id'), table_name='submissions')
    op.drop_index(op.f('ix_submissions_id'), table_name='submissions')
    op.drop_table('submissions')

    op.drop_index(op.f('ix_users_status'), table_name='users')
    op.drop_index(op.f('ix_users_role'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')

    submission_status.drop(op.get_bind(), checkfirst=True)
    user_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
