"""Initial schema: organization, users, submissions, resolutions, audit logs

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    # SQL-standard CURRENT_TIMESTAMP works on SQLite and Postgres
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def _ownership(table_name):
    return [
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', name=f'fk_{table_name}_owner_id'), nullable=False),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
    ]


def _review():
    return [
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('remarks', sa.Text(), nullable=True),
    ]


def _attachments():
    return [
        sa.Column('attachment_paths', sa.JSON(), nullable=True),
        sa.Column('attachment_link', sa.String(255), nullable=True),
    ]


def _index_owned(table_name, college_scoped=False, parent=None):
    op.create_index(f'ix_{table_name}_id', table_name, ['id'])
    op.create_index(f'ix_{table_name}_owner_id', table_name, ['owner_id'])
    if college_scoped:
        op.create_index(f'ix_{table_name}_college_id', table_name, ['college_id'])
    if parent:
        op.create_index(f'ix_{table_name}_{parent}', table_name, [parent])


def upgrade() -> None:
    # Skip if tables already exist (e.g. DB created by app create_all())
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if 'audit_logs' in inspector.get_table_names():
        return

    op.create_table(
        'campuses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False, unique=True),
        sa.Column('logo', sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_campuses_id', 'campuses', ['id'])

    op.create_table(
        'colleges',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('code', sa.String(50), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('logo', sa.String(), nullable=True),
        sa.Column('campus_id', sa.Integer(), sa.ForeignKey('campuses.id'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_colleges_id', 'colleges', ['id'])
    op.create_index('ix_colleges_campus_id', 'colleges', ['campus_id'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=True),
        sa.Column('remember_token', sa.String(100), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        sa.Column('college_id', sa.Integer(), sa.ForeignKey('colleges.id'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('avatar', sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'tech_transfers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('college_id', sa.Integer(), sa.ForeignKey('colleges.id'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(255), nullable=False),
        sa.Column('purpose', sa.String(255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('tags', sa.String(255), nullable=False),
        sa.Column('leader', sa.String(255), nullable=False),
        sa.Column('deliverables', sa.String(255), nullable=True),
        sa.Column('agency_partner', sa.String(255), nullable=False),
        sa.Column('contact_person', sa.String(255), nullable=False),
        sa.Column('contact_email', sa.String(255), nullable=True),
        sa.Column('contact_phone', sa.String(255), nullable=True),
        sa.Column('contact_address', sa.String(255), nullable=True),
        sa.Column('copyright', sa.String(10), nullable=False, server_default='no'),
        sa.Column('ip_details', sa.Text(), nullable=True),
        *_attachments(),
        *_ownership('tech_transfers'),
        *_review(),
        *_timestamps(),
    )
    _index_owned('tech_transfers', college_scoped=True)

    op.create_table(
        'awards',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('college_id', sa.Integer(), sa.ForeignKey('colleges.id'), nullable=True),
        sa.Column('award_name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('date_received', sa.Date(), nullable=False),
        sa.Column('event_details', sa.Text(), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('awarding_body', sa.String(255), nullable=False),
        sa.Column('people_involved', sa.String(255), nullable=False),
        *_attachments(),
        *_ownership('awards'),
        *_review(),
        *_timestamps(),
    )
    _index_owned('awards', college_scoped=True)

    op.create_table(
        'engagements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('college_id', sa.Integer(), sa.ForeignKey('colleges.id'), nullable=True),
        sa.Column('agency_partner', sa.String(255), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('activity_conducted', sa.String(255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('number_of_participants', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('faculty_involved', sa.String(255), nullable=False),
        sa.Column('narrative', sa.Text(), nullable=False),
        *_attachments(),
        *_ownership('engagements'),
        *_review(),
        *_timestamps(),
    )
    _index_owned('engagements', college_scoped=True)

    op.create_table(
        'modalities',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tech_transfer_id', sa.Integer(), sa.ForeignKey('tech_transfers.id'), nullable=False),
        sa.Column('modality', sa.String(255), nullable=False),
        sa.Column('tv_channel', sa.String(255), nullable=True),
        sa.Column('radio', sa.String(255), nullable=True),
        sa.Column('online_link', sa.String(255), nullable=True),
        sa.Column('time_air', sa.String(255), nullable=True),
        sa.Column('period', sa.String(255), nullable=True),
        sa.Column('partner_agency', sa.String(255), nullable=True),
        sa.Column('hosted_by', sa.String(255), nullable=True),
        *_ownership('modalities'),
        *_review(),
        *_timestamps(),
    )
    _index_owned('modalities', parent='tech_transfer_id')

    op.create_table(
        'impact_assessments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tech_transfer_id', sa.Integer(), sa.ForeignKey('tech_transfers.id'), nullable=False),
        sa.Column('beneficiary', sa.String(255), nullable=False),
        sa.Column('geographic_coverage', sa.String(255), nullable=False),
        sa.Column('num_direct_beneficiary', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('num_indirect_beneficiary', sa.Integer(), nullable=False, server_default='0'),
        *_ownership('impact_assessments'),
        *_review(),
        *_timestamps(),
    )
    _index_owned('impact_assessments', parent='tech_transfer_id')

    op.create_table(
        'resolutions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('resolution_number', sa.String(255), nullable=False, unique=True),
        sa.Column('effectivity', sa.Date(), nullable=False),
        sa.Column('expiration', sa.Date(), nullable=False),
        sa.Column('contact_person', sa.String(255), nullable=False),
        sa.Column('contact_number_email', sa.String(255), nullable=False),
        sa.Column('partner_agency', sa.String(255), nullable=False),
        *_attachments(),
        *_ownership('resolutions'),
        *_timestamps(),
    )
    _index_owned('resolutions')

    # actor_id and entity_id carry no foreign keys; entries outlive their rows
    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('actor_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(50), nullable=False),
        sa.Column('entity_type', sa.String(50), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=True),
        sa.Column('before_values', sa.JSON(), nullable=False),
        sa.Column('after_values', sa.JSON(), nullable=False),
        sa.Column('origin_address', sa.String(45), nullable=True),
        sa.Column('client_agent', sa.Text(), nullable=True),
        sa.Column('occurred_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_audit_logs_id', 'audit_logs', ['id'])
    op.create_index('ix_audit_logs_entity', 'audit_logs', ['entity_type', 'entity_id'])
    op.create_index('ix_audit_logs_actor_id', 'audit_logs', ['actor_id'])
    op.create_index('ix_audit_logs_action', 'audit_logs', ['action'])
    op.create_index('ix_audit_logs_occurred_at', 'audit_logs', ['occurred_at'])


def downgrade() -> None:
    for table in (
        'audit_logs',
        'resolutions',
        'impact_assessments',
        'modalities',
        'engagements',
        'awards',
        'tech_transfers',
        'users',
        'colleges',
        'campuses',
    ):
        op.drop_table(table)
