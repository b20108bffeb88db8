"""Initial schema: shifts, users, punches, adjustment requests and audit logs

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-17

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at():
    # SQL-standard CURRENT_TIMESTAMP works on SQLite and Postgres
    return sa.Column(
        'created_at',
        sa.DateTime(timezone=True),
        server_default=sa.text('CURRENT_TIMESTAMP'),
        nullable=False,
    )


def upgrade() -> None:
    # Skip if tables already exist (e.g. DB created by app create_all())
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    if 'users' in inspector.get_table_names():
        return

    op.create_table(
        'shifts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('start_time', sa.String(length=5), nullable=False),
        sa.Column('break_start', sa.String(length=5), nullable=False),
        sa.Column('break_end', sa.String(length=5), nullable=False),
        sa.Column('end_time', sa.String(length=5), nullable=False),
        sa.Column('total_minutes', sa.Integer(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_shifts_id'), 'shifts', ['id'], unique=False)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('cpf', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('shift_id', sa.Integer(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(['shift_id'], ['shifts.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_cpf'), 'users', ['cpf'], unique=True)
    op.create_index(op.f('ix_users_shift_id'), 'users', ['shift_id'], unique=False)

    op.create_table(
        'user_shift_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('shift_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['shift_id'], ['shifts.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_user_shift_history_id'), 'user_shift_history', ['id'], unique=False)
    op.create_index(op.f('ix_user_shift_history_user_id'), 'user_shift_history', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_shift_history_shift_id'), 'user_shift_history', ['shift_id'], unique=False)

    op.create_table(
        'time_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('edited_by_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('admin_id', sa.Integer(), nullable=True),
        sa.Column('admin_justification', sa.Text(), nullable=True),
        sa.Column('edited_at', sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['admin_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'date', 'type', name='uq_time_records_user_date_type')
    )
    op.create_index(op.f('ix_time_records_id'), 'time_records', ['id'], unique=False)
    op.create_index(op.f('ix_time_records_user_id'), 'time_records', ['user_id'], unique=False)
    op.create_index(op.f('ix_time_records_date'), 'time_records', ['date'], unique=False)

    op.create_table(
        'adjustment_requests',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('old_time', sa.String(length=5), nullable=True),
        sa.Column('new_time', sa.String(length=5), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default=sa.text("'pending'")),
        sa.Column('reviewed_by', sa.Integer(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reviewed_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_adjustment_requests_id'), 'adjustment_requests', ['id'], unique=False)
    op.create_index(op.f('ix_adjustment_requests_user_id'), 'adjustment_requests', ['user_id'], unique=False)
    op.create_index('ix_adjustment_requests_status_created', 'adjustment_requests', ['status', 'created_at'], unique=False)

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('actor_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('entity_type', sa.String(), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=True),
        sa.Column('meta_json', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_audit_logs_id'), 'audit_logs', ['id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_audit_logs_id'), table_name='audit_logs')
    op.drop_table('audit_logs')
    op.drop_index('ix_adjustment_requests_status_created', table_name='adjustment_requests')
    op.drop_index(op.f('ix_adjustment_requests_user_id'), table_name='adjustment_requests')
    op.drop_index(op.f('ix_adjustment_requests_id'), table_name='adjustment_requests')
    op.drop_table('adjustment_requests')
    op.drop_index(op.f('ix_time_records_date'), table_name='time_records')
    op.drop_index(op.f('ix_time_records_user_id'), table_name='time_records')
    op.drop_index(op.f('ix_time_records_id'), table_name='time_records')
    op.drop_table('time_records')
    op.drop_index(op.f('ix_user_shift_history_shift_id'), table_name='user_shift_history')
    op.drop_index(op.f('ix_user_shift_history_user_id'), table_name='user_shift_history')
    op.drop_index(op.f('ix_user_shift_history_id'), table_name='user_shift_history')
    op.drop_table('user_shift_history')
    op.drop_index(op.f('ix_users_shift_id'), table_name='users')
    op.drop_index(op.f('ix_users_cpf'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
    op.drop_index(op.f('ix_shifts_id'), table_name='shifts')
    op.drop_table('shifts')
