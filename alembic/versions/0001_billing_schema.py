"""billing schema: users, customers, staff, bills, billing_settings

Revision ID: 0001_billing_schema
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_billing_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("CREATE TYPE user_role AS ENUM ('admin', 'staff')")
    op.execute("CREATE TYPE customer_status AS ENUM ('active', 'pending')")
    op.execute("CREATE TYPE staff_status AS ENUM ('Active', 'Inactive')")
    op.execute("CREATE TYPE bill_status AS ENUM ('pending', 'paid', 'not paid')")

    op.create_table(
        "users",
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", postgresql.ENUM("admin", "staff", name="user_role", create_type=False), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_role"), "users", ["role"], unique=False)
    op.create_index(op.f("ix_users_is_active"), "users", ["is_active"], unique=False)

    op.create_table(
        "customers",
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("cnic", sa.String(20), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("connection_no", sa.String(50), nullable=False),
        sa.Column("assigned_to", sa.String(64), nullable=True),
        sa.Column("status", postgresql.ENUM("active", "pending", name="customer_status", create_type=False), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_customers_id"), "customers", ["id"], unique=False)
    op.create_index(op.f("ix_customers_cnic"), "customers", ["cnic"], unique=False)
    op.create_index(op.f("ix_customers_connection_no"), "customers", ["connection_no"], unique=False)
    op.create_index(op.f("ix_customers_assigned_to"), "customers", ["assigned_to"], unique=False)
    op.create_index(op.f("ix_customers_deleted_at"), "customers", ["deleted_at"], unique=False)

    op.create_table(
        "staff",
        sa.Column("uid", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("cnic", sa.String(20), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("status", postgresql.ENUM("Active", "Inactive", name="staff_status", create_type=False), nullable=False),
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_staff_id"), "staff", ["id"], unique=False)
    op.create_index(op.f("ix_staff_uid"), "staff", ["uid"], unique=True)
    op.create_index(op.f("ix_staff_email"), "staff", ["email"], unique=False)

    op.create_table(
        "bills",
        sa.Column("customer_id", sa.UUID(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", postgresql.ENUM("pending", "paid", "not paid", name="bill_status", create_type=False), nullable=False),
        sa.Column("bill_date", sa.DateTime(), nullable=False),
        sa.Column("payment_date", sa.DateTime(), nullable=True),
        sa.Column("billing_month", sa.String(7), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("customer_id", "billing_month", name="uq_bills_customer_month"),
        sa.CheckConstraint("amount > 0", name="ck_bills_amount_positive"),
        sa.CheckConstraint(
            "(status = 'paid') = (payment_date IS NOT NULL)",
            name="ck_bills_payment_date_iff_paid",
        ),
    )
    op.create_index(op.f("ix_bills_id"), "bills", ["id"], unique=False)
    op.create_index(op.f("ix_bills_customer_id"), "bills", ["customer_id"], unique=False)
    op.create_index(op.f("ix_bills_status"), "bills", ["status"], unique=False)
    op.create_index(op.f("ix_bills_bill_date"), "bills", ["bill_date"], unique=False)
    op.create_index(op.f("ix_bills_billing_month"), "bills", ["billing_month"], unique=False)

    op.create_table(
        "billing_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("fixed_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("auto_bill_generation", sa.Boolean(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("id = 1", name="ck_billing_settings_singleton"),
        sa.CheckConstraint("fixed_price > 0", name="ck_billing_settings_price_positive"),
    )


def downgrade() -> None:
    op.drop_table("billing_settings")
    op.drop_table("bills")
    op.drop_table("staff")
    op.drop_table("customers")
    op.drop_table("users")
    op.execute("DROP TYPE bill_status")
    op.execute("DROP TYPE staff_status")
    op.execute("DROP TYPE customer_status")
    op.execute("DROP TYPE user_role")
