"""initial_deal_pipeline_schema

Revision ID: 3c1f9a2b7d40
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f9a2b7d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'deals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('company_name', sa.Text(), nullable=False),
        sa.Column('revenue', sa.Numeric(15, 2), nullable=False),
        sa.Column('sde', sa.Numeric(15, 2), nullable=True),
        sa.Column('valuation_min', sa.Numeric(15, 2), nullable=True),
        sa.Column('valuation_max', sa.Numeric(15, 2), nullable=True),
        sa.Column('sde_multiple', sa.Numeric(5, 2), nullable=True),
        sa.Column('revenue_multiple', sa.Numeric(5, 2), nullable=True),
        sa.Column('commission', sa.Numeric(5, 2), nullable=True),
        sa.Column('stage', sa.Text(), nullable=False),
        sa.Column('priority', sa.Text(), nullable=False, server_default='medium'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('next_step_days', sa.Integer(), nullable=True),
        sa.Column('touches', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('age_in_stage', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('health_score', sa.Integer(), nullable=False, server_default='85'),
        sa.Column('owner_id', sa.Text(), nullable=False),
        sa.Column('owner', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('health_score >= 0 AND health_score <= 100', name='ck_deals_health_score'),
    )

    op.create_table(
        'buying_parties',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('target_acquisition_min', sa.Integer(), nullable=True),
        sa.Column('target_acquisition_max', sa.Integer(), nullable=True),
        sa.Column('budget_min', sa.Numeric(15, 2), nullable=True),
        sa.Column('budget_max', sa.Numeric(15, 2), nullable=True),
        sa.Column('timeline', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=False, server_default='evaluating'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'contacts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('role', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    # Contact links; entity_id/entity_type on a contact are derived from these
    op.create_table(
        'companies_contacts',
        sa.Column('deal_id', sa.Uuid(), nullable=False),
        sa.Column('contact_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['deal_id'], ['deals.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('deal_id', 'contact_id'),
    )
    op.create_table(
        'party_contacts',
        sa.Column('buying_party_id', sa.Uuid(), nullable=False),
        sa.Column('contact_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['buying_party_id'], ['buying_parties.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('buying_party_id', 'contact_id'),
    )

    op.create_table(
        'deal_buyer_matches',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('deal_id', sa.Uuid(), nullable=False),
        sa.Column('buying_party_id', sa.Uuid(), nullable=False),
        sa.Column('target_acquisition', sa.Integer(), nullable=True),
        sa.Column('budget', sa.Numeric(15, 2), nullable=True),
        sa.Column('status', sa.Text(), nullable=False, server_default='interested'),
        sa.Column('stage', sa.Text(), nullable=False, server_default='new'),
        sa.Column('stages', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['deal_id'], ['deals.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['buying_party_id'], ['buying_parties.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('deal_id', 'buying_party_id', name='uq_deal_buyer_match'),
    )
    op.create_index('ix_deal_buyer_matches_deal_id', 'deal_buyer_matches', ['deal_id'])

    op.create_table(
        'activities',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('deal_id', sa.Uuid(), nullable=True),
        sa.Column('buying_party_id', sa.Uuid(), nullable=True),
        sa.Column('type', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=False, server_default='pending'),
        sa.Column('assigned_to', sa.Text(), nullable=True),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['deal_id'], ['deals.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['buying_party_id'], ['buying_parties.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_activities_deal_id', 'activities', ['deal_id'])

    op.create_table(
        'documents',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('deal_id', sa.Uuid(), nullable=True),
        sa.Column('buying_party_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('status', sa.Text(), nullable=False, server_default='draft'),
        sa.Column('url', sa.Text(), nullable=True),
        sa.Column('doc_type', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['deal_id'], ['deals.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['buying_party_id'], ['buying_parties.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_documents_deal_id', 'documents', ['deal_id'])


def downgrade() -> None:
    op.drop_index('ix_documents_deal_id', 'documents')
    op.drop_table('documents')
    op.drop_index('ix_activities_deal_id', 'activities')
    op.drop_table('activities')
    op.drop_index('ix_deal_buyer_matches_deal_id', 'deal_buyer_matches')
    op.drop_table('deal_buyer_matches')
    op.drop_table('party_contacts')
    op.drop_table('companies_contacts')
    op.drop_table('contacts')
    op.drop_table('buying_parties')
    op.drop_table('deals')
