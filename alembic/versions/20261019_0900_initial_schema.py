"""Initial PayrollHub schema

Revision ID: 20261019_0900_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261019_0900_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


# Name-only lookup lists with a unique name
UNIQUE_NAME_LISTS = [
    'allowance_heads',
    'deduction_heads',
    'job_types',
    'leave_types',
    'designations',
    'marital_statuses',
    'employee_grades',
    'loan_types',
    'departments',
]

# Lookup lists whose names may repeat
REPEATABLE_NAME_LISTS = ['institutes', 'qualifications', 'equipments']


def _id_column():
    return sa.Column('id', sa.Uuid(), nullable=False)


def _timestamp_columns():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def _audit_columns():
    return [
        sa.Column('created_by_id', sa.Uuid(), nullable=True),
        sa.Column('updated_by_id', sa.Uuid(), nullable=True),
    ]


def _status_column():
    return sa.Column('status', sa.String(length=20), server_default='active', nullable=False)


def _master_list(table, *columns, unique_name=True):
    op.create_table(
        table,
        _id_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        *columns,
        *_audit_columns(),
        _status_column(),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id', name=f'pk_{table}'),
        *([sa.UniqueConstraint('name', name=f'uq_{table}_name')] if unique_name else []),
    )
    if not unique_name:
        op.create_index(f'ix_{table}_name', table, ['name'])


def upgrade() -> None:
    # Users and the activity log
    op.create_table(
        'users',
        _id_column(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'activity_logs',
        _id_column(),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('action', sa.String(length=20), nullable=False),
        sa.Column('module', sa.String(length=100), nullable=False),
        sa.Column('entity', sa.String(length=100), nullable=True),
        sa.Column('entity_id', sa.String(length=64), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('old_values', sa.JSON(), nullable=True),
        sa.Column('new_values', sa.JSON(), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name='fk_activity_logs_user_id_users', ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_activity_logs'),
    )
    op.create_index('ix_activity_logs_user_id', 'activity_logs', ['user_id'])
    op.create_index('ix_activity_logs_action', 'activity_logs', ['action'])
    op.create_index('ix_activity_logs_module', 'activity_logs', ['module'])

    # Lookup lists
    for table in UNIQUE_NAME_LISTS:
        _master_list(table)
    for table in REPEATABLE_NAME_LISTS:
        _master_list(table, unique_name=False)

    _master_list(
        'bonus_types',
        sa.Column('calculation_type', sa.String(length=20), server_default='Amount', nullable=False),
    )

    # Payroll policy tables
    _master_list('salary_breakups', sa.Column('details', sa.Text(), nullable=True))
    _master_list(
        'provident_funds',
        sa.Column('percentage', sa.Numeric(precision=5, scale=2), nullable=False,
                  comment='Contribution as a percentage of basic salary'),
    )
    _master_list(
        'tax_slabs',
        sa.Column('min_amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('max_amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('rate', sa.Numeric(precision=5, scale=2), nullable=False),
    )
    _master_list(
        'rebate_natures',
        sa.Column('type', sa.String(length=20), server_default='other', nullable=False),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('max_investment_percentage', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('max_investment_amount', sa.Numeric(precision=18, scale=2), nullable=True),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('under_section', sa.String(length=50), nullable=True),
        sa.Column('is_age_dependent', sa.Boolean(), nullable=False),
    )
    _master_list(
        'working_hours_policies',
        sa.Column('start_working_hours', sa.String(length=5), nullable=False),
        sa.Column('end_working_hours', sa.String(length=5), nullable=False),
        sa.Column('start_break_time', sa.String(length=5), nullable=True),
        sa.Column('end_break_time', sa.String(length=5), nullable=True),
        sa.Column('half_day_start_time', sa.String(length=5), nullable=True),
        sa.Column('late_start_time', sa.String(length=5), nullable=True),
        sa.Column('short_day_mins', sa.Integer(), nullable=True),
        sa.Column('overtime_rate', sa.Numeric(precision=5, scale=2), nullable=True),
    )

    op.create_table(
        'eobis',
        _id_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('year_month', sa.String(length=7), nullable=False, comment='Period in YYYY-MM form'),
        *_audit_columns(),
        _status_column(),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id', name='pk_eobis'),
        sa.UniqueConstraint('year_month', name='uq_eobis_year_month'),
    )

    # Geography
    op.create_table(
        'countries',
        _id_column(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('iso', sa.String(length=3), nullable=False),
        sa.Column('phone_code', sa.String(length=10), nullable=True),
        _status_column(),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id', name='pk_countries'),
        sa.UniqueConstraint('name', name='uq_countries_name'),
        sa.UniqueConstraint('iso', name='uq_countries_iso'),
    )

    op.create_table(
        'states',
        _id_column(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('country_id', sa.Uuid(), nullable=False),
        _status_column(),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ['country_id'], ['countries.id'],
            name='fk_states_country_id_countries', ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_states'),
        sa.UniqueConstraint('name', 'country_id', name='uq_states_name_country'),
    )
    op.create_index('ix_states_country_id', 'states', ['country_id'])

    op.create_table(
        'cities',
        _id_column(),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('country_id', sa.Uuid(), nullable=False),
        sa.Column('state_id', sa.Uuid(), nullable=False),
        sa.Column('latitude', sa.Numeric(precision=9, scale=6), nullable=True),
        sa.Column('longitude', sa.Numeric(precision=9, scale=6), nullable=True),
        *_audit_columns(),
        _status_column(),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ['country_id'], ['countries.id'],
            name='fk_cities_country_id_countries', ondelete='RESTRICT',
        ),
        sa.ForeignKeyConstraint(
            ['state_id'], ['states.id'],
            name='fk_cities_state_id_states', ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_cities'),
        sa.UniqueConstraint('name', 'state_id', name='uq_cities_name_state'),
    )
    op.create_index('ix_cities_name', 'cities', ['name'])
    op.create_index('ix_cities_state_id', 'cities', ['state_id'])

    op.create_table(
        'locations',
        _id_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city_id', sa.Uuid(), nullable=True),
        *_audit_columns(),
        _status_column(),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ['city_id'], ['cities.id'],
            name='fk_locations_city_id_cities', ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_locations'),
        sa.UniqueConstraint('name', name='uq_locations_name'),
    )

    # Employees
    posting_fks = [
        ('department_id', 'departments'),
        ('designation_id', 'designations'),
        ('location_id', 'locations'),
        ('city_id', 'cities'),
        ('state_id', 'states'),
    ]
    op.create_table(
        'employees',
        _id_column(),
        sa.Column('employee_code', sa.String(length=50), nullable=False),
        sa.Column('employee_name', sa.String(length=255), nullable=False),
        sa.Column('department_id', sa.Uuid(), nullable=True),
        sa.Column('designation_id', sa.Uuid(), nullable=True),
        sa.Column('employee_salary', sa.Numeric(precision=18, scale=2), nullable=False,
                  comment='Current gross monthly salary'),
        sa.Column('joining_date', sa.Date(), nullable=True),
        sa.Column('location_id', sa.Uuid(), nullable=True),
        sa.Column('city_id', sa.Uuid(), nullable=True),
        sa.Column('state_id', sa.Uuid(), nullable=True),
        *_audit_columns(),
        _status_column(),
        *_timestamp_columns(),
        *[
            sa.ForeignKeyConstraint(
                [column], [f'{target}.id'],
                name=f'fk_employees_{column}_{target}', ondelete='RESTRICT',
            )
            for column, target in posting_fks
        ],
        sa.PrimaryKeyConstraint('id', name='pk_employees'),
        sa.UniqueConstraint('employee_code', name='uq_employees_employee_code'),
    )
    for column, _ in posting_fks:
        op.create_index(f'ix_employees_{column}', 'employees', [column])

    op.create_table(
        'employee_transfer_histories',
        _id_column(),
        sa.Column('employee_id', sa.Uuid(), nullable=False),
        sa.Column('transfer_date', sa.Date(), nullable=False),
        sa.Column('previous_location_id', sa.Uuid(), nullable=True),
        sa.Column('previous_city_id', sa.Uuid(), nullable=True),
        sa.Column('previous_state_id', sa.Uuid(), nullable=True),
        sa.Column('new_location_id', sa.Uuid(), nullable=True),
        sa.Column('new_city_id', sa.Uuid(), nullable=True),
        sa.Column('new_state_id', sa.Uuid(), nullable=True),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('created_by_id', sa.Uuid(), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ['employee_id'], ['employees.id'],
            name='fk_employee_transfer_histories_employee_id_employees', ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_employee_transfer_histories'),
    )
    op.create_index(
        'ix_employee_transfer_histories_employee_id', 'employee_transfer_histories', ['employee_id']
    )

    # Payroll adjustments
    op.create_table(
        'bonuses',
        _id_column(),
        sa.Column('employee_id', sa.Uuid(), nullable=False),
        sa.Column('bonus_type_id', sa.Uuid(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('calculation_type', sa.String(length=20), nullable=False),
        sa.Column('percentage', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('bonus_month', sa.Integer(), nullable=False),
        sa.Column('bonus_year', sa.Integer(), nullable=False),
        sa.Column('bonus_month_year', sa.String(length=7), nullable=False),
        sa.Column('payment_method', sa.String(length=30), nullable=False),
        sa.Column('adjustment_method', sa.String(length=40), nullable=False),
        sa.Column('is_taxable', sa.Boolean(), nullable=False),
        sa.Column('tax_percentage', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_audit_columns(),
        _status_column(),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ['employee_id'], ['employees.id'],
            name='fk_bonuses_employee_id_employees', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['bonus_type_id'], ['bonus_types.id'],
            name='fk_bonuses_bonus_type_id_bonus_types', ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_bonuses'),
        sa.UniqueConstraint(
            'employee_id', 'bonus_type_id', 'bonus_month_year',
            name='uq_bonuses_employee_type_period',
        ),
    )
    op.create_index('ix_bonuses_employee_id', 'bonuses', ['employee_id'])
    op.create_index('ix_bonuses_bonus_month_year', 'bonuses', ['bonus_month_year'])

    op.create_table(
        'deductions',
        _id_column(),
        sa.Column('employee_id', sa.Uuid(), nullable=False),
        sa.Column('deduction_head_id', sa.Uuid(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('month', sa.String(length=2), nullable=False),
        sa.Column('year', sa.String(length=4), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('is_taxable', sa.Boolean(), nullable=False),
        sa.Column('tax_percentage', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_audit_columns(),
        _status_column(),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ['employee_id'], ['employees.id'],
            name='fk_deductions_employee_id_employees', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['deduction_head_id'], ['deduction_heads.id'],
            name='fk_deductions_deduction_head_id_deduction_heads', ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_deductions'),
        sa.UniqueConstraint(
            'employee_id', 'deduction_head_id', 'month', 'year',
            name='uq_deductions_employee_head_period',
        ),
    )
    op.create_index('ix_deductions_employee_id', 'deductions', ['employee_id'])

    # Chart of accounts
    op.create_table(
        'chart_of_accounts',
        _id_column(),
        sa.Column('code', sa.String(length=20), nullable=False, comment='Account code, e.g. 11110'),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column(
            'type',
            sa.Enum('ASSET', 'LIABILITY', 'EQUITY', 'INCOME', 'EXPENSE', name='account_type'),
            nullable=False,
        ),
        sa.Column('is_group', sa.Boolean(), nullable=False,
                  comment='Group accounts only contain children and hold no postings'),
        sa.Column('parent_id', sa.Uuid(), nullable=True),
        sa.Column('balance', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_audit_columns(),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(
            ['parent_id'], ['chart_of_accounts.id'],
            name='fk_chart_of_accounts_parent_id_chart_of_accounts', ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_chart_of_accounts'),
        sa.UniqueConstraint('code', name='uq_chart_of_accounts_code'),
    )
    op.create_index('ix_chart_of_accounts_parent_id', 'chart_of_accounts', ['parent_id'])


def downgrade() -> None:
    op.drop_table('chart_of_accounts')
    sa.Enum(name='account_type').drop(op.get_bind(), checkfirst=True)
    op.drop_table('deductions')
    op.drop_table('bonuses')
    op.drop_table('employee_transfer_histories')
    op.drop_table('employees')
    op.drop_table('locations')
    op.drop_table('cities')
    op.drop_table('states')
    op.drop_table('countries')
    op.drop_table('eobis')
    for table in [
        'working_hours_policies', 'rebate_natures', 'tax_slabs', 'provident_funds',
        'salary_breakups', 'bonus_types',
    ]:
        op.drop_table(table)
    for table in UNIQUE_NAME_LISTS + REPEATABLE_NAME_LISTS:
        op.drop_table(table)
    op.drop_table('activity_logs')
    op.drop_table('users')
