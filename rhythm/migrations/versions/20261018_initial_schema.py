"""initial schema: users, habits, tasks, identities, wellbeing, focus

Revision ID: 20261018_initial_schema
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261018_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    cols = [sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now())]
    if updated:
        cols.append(sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()))
    return cols


def _user_fk() -> sa.Column:
    return sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False, index=True)


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255)),
        sa.Column("timezone", sa.String(length=64)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)

    op.create_table(
        "user_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False, unique=True),
        sa.Column("rest_days", sa.JSON(), nullable=False),
        sa.Column("vacation_mode", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("vacation_start", sa.Date()),
        sa.Column("vacation_end", sa.Date()),
        *_timestamps(),
    )

    op.create_table(
        "identity",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("emoji", sa.String(length=16), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_identity_user_active", "identity", ["user_id", "is_active"])

    op.create_table(
        "habit",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("identity_id", sa.Integer(), sa.ForeignKey("identity.id", ondelete="SET NULL")),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("emoji", sa.String(length=16), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("frequency", sa.String(length=32), nullable=False, server_default="DAILY"),
        sa.Column("scheduled_days", sa.JSON(), nullable=False),
        sa.Column("target_per_week", sa.Integer()),
        sa.Column("full_description", sa.Text()),
        sa.Column("recovery_description", sa.Text()),
        sa.Column("minimal_description", sa.Text()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_habit_user_active_order", "habit", ["user_id", "is_active", "sort_order"])
    op.create_index("ix_habit_identity", "habit", ["identity_id"])

    op.create_table(
        "habit_completion",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column(
            "habit_id",
            sa.Integer(),
            sa.ForeignKey("habit.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("mode", sa.String(length=16)),
        *_timestamps(updated=False),
        sa.UniqueConstraint("habit_id", "date", name="uq_habit_completion_habit_date"),
    )
    op.create_index("ix_habit_completion_user_date", "habit_completion", ["user_id", "date"])

    op.create_table(
        "task",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("identity_id", sa.Integer(), sa.ForeignKey("identity.id", ondelete="SET NULL")),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("emoji", sa.String(length=16), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("due_date", sa.Date()),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completed_at", sa.DateTime()),
        *_timestamps(),
    )
    op.create_index("ix_task_user_completed_order", "task", ["user_id", "completed", "sort_order"])
    op.create_index("ix_task_user_due_date", "task", ["user_id", "due_date"])

    op.create_table(
        "daily_energy_level",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("mode", sa.String(length=16), nullable=False, server_default="FULL"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "date", name="uq_daily_energy_level_user_date"),
    )

    op.create_table(
        "life_radar",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("week_start", sa.Date(), nullable=False),
        *[
            sa.Column(area, sa.String(length=8), nullable=False, server_default="GREEN")
            for area in ("body", "mind", "profession", "projects", "environment")
        ],
        sa.Column("notes", sa.Text()),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "week_start", name="uq_life_radar_user_week"),
    )

    op.create_table(
        "reflection_entry",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("question", sa.String(length=255), nullable=False),
        sa.Column("answer", sa.String(length=300), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "date", name="uq_reflection_entry_user_date"),
    )

    op.create_table(
        "pomodoro_session",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        sa.Column("mode", sa.String(length=16), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("habit_id", sa.Integer(), sa.ForeignKey("habit.id", ondelete="SET NULL")),
        sa.Column("task_id", sa.Integer(), sa.ForeignKey("task.id", ondelete="SET NULL")),
        sa.Column("task_name", sa.String(length=255)),
    )
    op.create_index(
        "ix_pomodoro_session_user_completed_at", "pomodoro_session", ["user_id", "completed_at"]
    )
    op.create_index("ix_pomodoro_session_user_mode", "pomodoro_session", ["user_id", "mode"])


def downgrade():
    op.drop_index("ix_pomodoro_session_user_mode", table_name="pomodoro_session")
    op.drop_index("ix_pomodoro_session_user_completed_at", table_name="pomodoro_session")
    op.drop_table("pomodoro_session")
    op.drop_table("reflection_entry")
    op.drop_table("life_radar")
    op.drop_table("daily_energy_level")
    op.drop_index("ix_task_user_due_date", table_name="task")
    op.drop_index("ix_task_user_completed_order", table_name="task")
    op.drop_table("task")
    op.drop_index("ix_habit_completion_user_date", table_name="habit_completion")
    op.drop_table("habit_completion")
    op.drop_index("ix_habit_identity", table_name="habit")
    op.drop_index("ix_habit_user_active_order", table_name="habit")
    op.drop_table("habit")
    op.drop_index("ix_identity_user_active", table_name="identity")
    op.drop_table("identity")
    op.drop_table("user_settings")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")
