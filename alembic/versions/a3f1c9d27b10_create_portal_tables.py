"""Create applicants, applicant id reservations and notification outbox

Revision ID: a3f1c9d27b10
Revises:
Create Date: 2026-10-19 10:12:44.318207
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'a3f1c9d27b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CANDIDATE_JSON_COLUMNS = [
    'personal_details',
    'benchmark_disability',
    'ex_servicemen',
    'employee_details',
    'wcl_details',
    'correspondence_address',
    'permanent_address',
    'dob_details',
    'qualification_details',
    'document_details',
]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'applicants',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('applicant_id', sa.String(length=20), nullable=False),
        sa.Column('post_code', sa.String(length=50), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('mobile_number', sa.String(length=20), nullable=False),
        sa.Column('alternate_mobile_number', sa.String(length=20), nullable=True),
        sa.Column('email_address', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('otp_code', sa.String(length=6), nullable=True),
        sa.Column('otp_expires_at', sa.DateTime(), nullable=True),
        *[sa.Column(name, sa.JSON(), nullable=False) for name in CANDIDATE_JSON_COLUMNS],
        sa.Column('utr_number', sa.String(length=50), nullable=True),
        sa.Column('payment_status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('payment_date', sa.DateTime(), nullable=True),
        sa.Column('admin_verified_at', sa.DateTime(), nullable=True),
        sa.Column('admin_remarks', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_applicants_applicant_id'), 'applicants', ['applicant_id'], unique=True)
    op.create_index(op.f('ix_applicants_mobile_number'), 'applicants', ['mobile_number'], unique=True)
    op.create_index(op.f('ix_applicants_email_address'), 'applicants', ['email_address'], unique=True)

    op.create_table(
        'applicant_id_reservations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('reserved_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        'notification_outbox',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('recipient', sa.String(length=255), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('template', sa.String(length=100), nullable=False),
        sa.Column('context', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_error', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f('ix_notification_outbox_recipient'), 'notification_outbox', ['recipient'])
    op.create_index(op.f('ix_notification_outbox_status'), 'notification_outbox', ['status'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_notification_outbox_status'), table_name='notification_outbox')
    op.drop_index(op.f('ix_notification_outbox_recipient'), table_name='notification_outbox')
    op.drop_table('notification_outbox')
    op.drop_table('applicant_id_reservations')
    op.drop_index(op.f('ix_applicants_email_address'), table_name='applicants')
    op.drop_index(op.f('ix_applicants_mobile_number'), table_name='applicants')
    op.drop_index(op.f('ix_applicants_applicant_id'), table_name='applicants')
    op.drop_table('applicants')
