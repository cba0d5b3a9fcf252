"""create scheduling tables

Revision ID: 0001_scheduling
Revises: None
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_scheduling"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("name", sa.String(length=120)),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=50)),
        *_timestamps(),
    )
    op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False, unique=True),
        sa.Column("contact_name", sa.String(length=100)),
        sa.Column("contact_email", sa.String(length=254)),
        *_timestamps(),
    )
    op.create_table(
        "candidates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=254)),
        sa.Column("schedule_token", sa.String(length=64)),
        sa.Column("onsite_block_minutes", sa.Integer()),
        *_timestamps(),
    )
    op.create_index("ix_candidates_user_id", "candidates", ["user_id"])
    op.create_index("ix_candidates_email", "candidates", ["email"])
    op.create_index("ix_candidates_schedule_token", "candidates", ["schedule_token"], unique=True)

    op.create_table(
        "schedules",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("candidate_id", sa.Integer(), sa.ForeignKey("candidates.id"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("interview_type", sa.String(length=10), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("blocked_by_id", sa.Integer(), sa.ForeignKey("schedules.id")),
        *_timestamps(),
    )
    op.create_index("ix_schedules_candidate_id", "schedules", ["candidate_id"])
    op.create_index("ix_schedules_date", "schedules", ["date"])
    op.create_index("ix_schedules_status", "schedules", ["status"])
    op.create_index("ix_schedules_blocked_by_id", "schedules", ["blocked_by_id"])

    op.create_table(
        "schedule_bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("schedule_id", sa.Integer(), sa.ForeignKey("schedules.id"), nullable=False, unique=True),
        sa.Column("candidate_id", sa.Integer(), sa.ForeignKey("candidates.id"), nullable=False),
        sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id")),
        sa.Column("company_name", sa.String(length=200), nullable=False),
        sa.Column("confirmed_at", sa.DateTime(), nullable=False),
        sa.Column("cancelled_at", sa.DateTime()),
        sa.Column("cancel_reason", sa.Text()),
        *_timestamps(),
    )
    op.create_index("ix_schedule_bookings_candidate_id", "schedule_bookings", ["candidate_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("booking_id", sa.Integer(), sa.ForeignKey("schedule_bookings.id"), nullable=False),
        sa.Column("type", sa.String(length=50)),
        sa.Column("sent_to", sa.String(length=255)),
        sa.Column("subject", sa.String(length=255)),
        sa.Column("body", sa.Text()),
        sa.Column("provider_message_id", sa.String(length=255)),
        sa.Column("sent_at", sa.DateTime()),
        *_timestamps(),
    )


def downgrade():
    op.drop_table("notifications")
    op.drop_table("schedule_bookings")
    op.drop_table("schedules")
    op.drop_table("candidates")
    op.drop_table("companies")
    op.drop_table("users")
