"""initial schema: users, customers, robot types, robots, inspections, files

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-11-20 10:00:00
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "0001_initial_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels = None
depends_on = None


def _timestamps():
    return (
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(160), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("profile", sa.JSON(), nullable=False),
        sa.Column("refresh_tokens", sa.JSON(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])
    op.create_index("ix_users_is_active", "users", ["is_active"])

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("company_name", sa.String(200), nullable=False),
        sa.Column("contact_info", sa.JSON(), nullable=False),
        sa.Column("service_agreement", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_customers"),
    )
    op.create_index("ix_customers_company_name", "customers", ["company_name"])
    op.create_index("ix_customers_is_active", "customers", ["is_active"])

    op.create_table(
        "customer_technicians",
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="CASCADE",
                                name="fk_customer_technicians_customer_id_customers"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE",
                                name="fk_customer_technicians_user_id_users"),
        sa.PrimaryKeyConstraint("customer_id", "user_id", name="pk_customer_technicians"),
    )

    op.create_table(
        "robot_types",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("manufacturer", sa.String(100), nullable=False),
        sa.Column("model", sa.String(100), nullable=False),
        sa.Column("image", sa.String(255), nullable=False),
        sa.Column("specifications", sa.JSON(), nullable=False),
        sa.Column("maintenance_items", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_robot_types"),
    )
    op.create_index("ix_robot_types_name", "robot_types", ["name"], unique=True)
    op.create_index("ix_robot_types_manufacturer", "robot_types", ["manufacturer"])
    op.create_index("ix_robot_types_is_active", "robot_types", ["is_active"])

    op.create_table(
        "robots",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("serial_number", sa.String(80), nullable=False),
        sa.Column("model", sa.String(100), nullable=False),
        sa.Column("manufacturer", sa.String(100), nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("robot_type_id", sa.Integer(), nullable=True),
        sa.Column("specifications", sa.JSON(), nullable=False),
        sa.Column("qr_code", sa.String(120), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("last_maintenance_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("next_maintenance_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.JSON(), nullable=False),
        sa.Column("operational_hours", sa.Float(), nullable=False),
        sa.Column("alerts", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], name="fk_robots_customer_id_customers"),
        sa.ForeignKeyConstraint(["robot_type_id"], ["robot_types.id"], name="fk_robots_robot_type_id_robot_types"),
        sa.PrimaryKeyConstraint("id", name="pk_robots"),
        sa.UniqueConstraint("qr_code", name="uq_robots_qr_code"),
    )
    op.create_index("ix_robots_serial_number", "robots", ["serial_number"], unique=True)
    op.create_index("ix_robots_customer_id", "robots", ["customer_id"])
    op.create_index("ix_robots_status", "robots", ["status"])
    op.create_index("ix_robots_next_maintenance_date", "robots", ["next_maintenance_date"])

    op.create_table(
        "inspections",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("robot_id", sa.Integer(), nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("technician_id", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("checklist", sa.JSON(), nullable=False),
        sa.Column("overall_status", sa.String(20), nullable=True),
        sa.Column("issues_found", sa.Integer(), nullable=False),
        sa.Column("photos_count", sa.Integer(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("next_maintenance_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("signature", sa.Text(), nullable=True),
        sa.Column("summary", sa.String(1000), nullable=True),
        sa.Column("recommendations", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["robot_id"], ["robots.id"], name="fk_inspections_robot_id_robots"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], name="fk_inspections_customer_id_customers"),
        sa.ForeignKeyConstraint(["technician_id"], ["users.id"], name="fk_inspections_technician_id_users"),
        sa.PrimaryKeyConstraint("id", name="pk_inspections"),
    )
    op.create_index("ix_inspections_robot_id", "inspections", ["robot_id"])
    op.create_index("ix_inspections_customer_id", "inspections", ["customer_id"])
    op.create_index("ix_inspections_technician_id", "inspections", ["technician_id"])
    op.create_index("ix_inspections_start_time", "inspections", ["start_time"])
    op.create_index("ix_inspections_status", "inspections", ["status"])

    op.create_table(
        "files",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("filename", sa.String(255), nullable=False),
        sa.Column("original_name", sa.String(255), nullable=False),
        sa.Column("mime_type", sa.String(120), nullable=False),
        sa.Column("size", sa.Integer(), nullable=False),
        sa.Column("uploaded_by", sa.Integer(), nullable=False),
        sa.Column("related_type", sa.String(20), nullable=False),
        sa.Column("related_id", sa.Integer(), nullable=False),
        sa.Column("storage_location", sa.String(500), nullable=False),
        sa.Column("url", sa.String(500), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("download_count", sa.Integer(), nullable=False),
        sa.Column("last_accessed", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["uploaded_by"], ["users.id"], name="fk_files_uploaded_by_users"),
        sa.PrimaryKeyConstraint("id", name="pk_files"),
    )
    op.create_index("ix_files_mime_type", "files", ["mime_type"])
    op.create_index("ix_files_uploaded_by", "files", ["uploaded_by"])
    op.create_index("ix_files_created_at", "files", ["created_at"])
    op.create_index("ix_files_related", "files", ["related_type", "related_id"])


def downgrade() -> None:
    op.drop_table("files")
    op.drop_table("inspections")
    op.drop_table("robots")
    op.drop_table("robot_types")
    op.drop_table("customer_technicians")
    op.drop_table("customers")
    op.drop_table("users")
