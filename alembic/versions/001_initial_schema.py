"""initial schema: users, documents, chunks, chat history

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-16 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Create the four tables the API and worker share.

    Readiness has no column of its own: a document with zero rows in
    documents_chunks is still processing.
    """
    op.create_table(
        'users',
        sa.Column('id', sa.String(128), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'documents',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(128), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('file_name', sa.String(512), nullable=False),
        sa.Column('storage_path', sa.String(1024), nullable=True),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_documents_user_id', 'documents', ['user_id'])
    op.create_index('ix_documents_uploaded_at', 'documents', ['uploaded_at'])

    op.create_table(
        'documents_chunks',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('document_id', sa.String(36), sa.ForeignKey('documents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('chunk_index', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('embedding', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('document_id', 'chunk_index', name='uq_documents_chunks_document_index'),
    )
    op.create_index('ix_documents_chunks_document_id', 'documents_chunks', ['document_id'])

    op.create_table(
        'chat_history',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('document_id', sa.String(36), sa.ForeignKey('documents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.String(128), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('message_type', sa.String(10), nullable=False),
        sa.Column('message_content', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("message_type IN ('user', 'ai')", name='ck_chat_history_message_type'),
    )
    op.create_index('ix_chat_history_document_id', 'chat_history', ['document_id'])
    op.create_index('ix_chat_history_user_id', 'chat_history', ['user_id'])
    op.create_index('ix_chat_history_timestamp', 'chat_history', ['timestamp'])


def downgrade() -> None:
    """
    Drop every table.

    Warning: This deletes all documents, chunks and chat history.
    """
    op.drop_table('chat_history')
    op.drop_table('documents_chunks')
    op.drop_table('documents')
    op.drop_table('users')
