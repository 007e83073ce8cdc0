"""Create legacy audit tables

Revision ID: 001_legacy_audit
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_legacy_audit'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    existing = set(inspector.get_table_names())

    # The legacy database usually has these already; only create what is missing
    if 'Member' not in existing:
        op.create_table(
            'Member',
            sa.Column('member_uid', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.PrimaryKeyConstraint('member_uid')
        )

    if 'Membership' not in existing:
        op.create_table(
            'Membership',
            sa.Column('membership_uid', sa.Integer(), nullable=False),
            sa.Column('membership_number', sa.String(), nullable=True),
            sa.PrimaryKeyConstraint('membership_uid')
        )

    if 'MemberMembership' not in existing:
        op.create_table(
            'MemberMembership',
            sa.Column('member_membership_uid', sa.Integer(), nullable=False),
            sa.Column('member_uid', sa.Integer(), nullable=False),
            sa.Column('membership_uid', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['member_uid'], ['Member.member_uid'], ),
            sa.ForeignKeyConstraint(['membership_uid'], ['Membership.membership_uid'], ),
            sa.PrimaryKeyConstraint('member_membership_uid'),
            sa.UniqueConstraint('member_uid', 'membership_uid', name='uq_member_membership')
        )

    if 'QuintessUser' not in existing:
        op.create_table(
            'QuintessUser',
            sa.Column('quintess_user_uid', sa.Integer(), nullable=False),
            sa.Column('login', sa.String(), nullable=False),
            sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.PrimaryKeyConstraint('quintess_user_uid'),
            sa.UniqueConstraint('login')
        )

    if 'MembershipContract' not in existing:
        op.create_table(
            'MembershipContract',
            sa.Column('membership_contract_uid', sa.Integer(), nullable=False),
            sa.Column('membership_uid', sa.Integer(), nullable=True),
            sa.Column('contract_number', sa.String(), nullable=True),
            sa.ForeignKeyConstraint(['membership_uid'], ['Membership.membership_uid'], ),
            sa.PrimaryKeyConstraint('membership_contract_uid')
        )

    if 'Audit' not in existing:
        op.create_table(
            'Audit',
            sa.Column('audit_uid', sa.Integer(), nullable=False),
            sa.Column('auditable_id', sa.Integer(), nullable=True),
            sa.Column('auditable_type', sa.String(), nullable=True),
            sa.Column('action', sa.String(), nullable=True),
            sa.Column('change_history', sa.Text(), nullable=True),
            sa.Column('version', sa.Integer(), nullable=True, server_default='0'),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
            sa.Column('audit_type_ucode', sa.String(), nullable=True),
            sa.Column('membership_uid', sa.Integer(), nullable=True),
            sa.Column('quintess_editor_uid', sa.Integer(), nullable=True),
            sa.Column('member_editor_uid', sa.Integer(), nullable=True),
            sa.Column('membership_contract_uid', sa.Integer(), nullable=True),
            sa.ForeignKeyConstraint(['membership_uid'], ['Membership.membership_uid'], ),
            sa.ForeignKeyConstraint(['quintess_editor_uid'], ['QuintessUser.quintess_user_uid'], ),
            sa.ForeignKeyConstraint(['member_editor_uid'], ['Member.member_uid'], ),
            sa.ForeignKeyConstraint(['membership_contract_uid'], ['MembershipContract.membership_contract_uid'], ),
            sa.PrimaryKeyConstraint('audit_uid')
        )
        op.create_index(op.f('ix_Audit_auditable_id'), 'Audit', ['auditable_id'], unique=False)
        op.create_index(op.f('ix_Audit_auditable_type'), 'Audit', ['auditable_type'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_Audit_auditable_type'), table_name='Audit')
    op.drop_index(op.f('ix_Audit_auditable_id'), table_name='Audit')
    op.drop_table('Audit')
    op.drop_table('MembershipContract')
    op.drop_table('QuintessUser')
    op.drop_table('MemberMembership')
    op.drop_table('Membership')
    op.drop_table('Member')
