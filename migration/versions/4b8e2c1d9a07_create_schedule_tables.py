"""create assignment, day assignment and assignment group tables

Revision ID: 4b8e2c1d9a07
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "4b8e2c1d9a07"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "project_assignments",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("member_id", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_assignment_project_member", "project_assignments", ["project_id", "member_id"]
    )

    op.create_table(
        "day_assignments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("assignment_id", sa.String(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("comment", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["assignment_id"], ["project_assignments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_day_assignment_date", "day_assignments", ["assignment_id", "date"])

    op.create_table(
        "assignment_groups",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("assignment_id", sa.String(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column(
            "priority",
            sa.Enum("HIGH", "NORMAL", "LOW", name="grouppriority"),
            nullable=False,
            server_default="NORMAL",
        ),
        sa.Column("comment", sa.String(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.CheckConstraint("start_date <= end_date", name="ck_assignment_group_range"),
        sa.ForeignKeyConstraint(["assignment_id"], ["project_assignments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_group_assignment", "assignment_groups", ["assignment_id"])
    op.create_index("idx_group_start_end", "assignment_groups", ["start_date", "end_date"])


def downgrade() -> None:
    op.drop_index("idx_group_start_end", table_name="assignment_groups")
    op.drop_index("idx_group_assignment", table_name="assignment_groups")
    op.drop_table("assignment_groups")
    op.drop_index("idx_day_assignment_date", table_name="day_assignments")
    op.drop_table("day_assignments")
    op.drop_index("idx_assignment_project_member", table_name="project_assignments")
    op.drop_table("project_assignments")
