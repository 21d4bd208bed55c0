# infra/db/models.py
from __future__ import annotations
import datetime as dt
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.models import GroupPriority


class ProjectAssignmentORM(Base):
    __tablename__ = "project_assignments"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    # project and member rows live outside this service; ids are opaque
    project_id: Mapped[str] = mapped_column(String, nullable=False)
    member_id: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

Index("idx_assignment_project_member", ProjectAssignmentORM.project_id, ProjectAssignmentORM.member_id)


class DayAssignmentORM(Base):
    __tablename__ = "day_assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    assignment_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("project_assignments.id", ondelete="CASCADE"),
        nullable=False,
    )
    # no unique constraint on (assignment_id, date): duplicates are repaired by reconcile
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(String, nullable=True)

Index("idx_day_assignment_date", DayAssignmentORM.assignment_id, DayAssignmentORM.date)


class AssignmentGroupORM(Base):
    __tablename__ = "assignment_groups"
    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_assignment_group_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    assignment_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("project_assignments.id", ondelete="CASCADE"),
        nullable=False,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    priority: Mapped[GroupPriority] = mapped_column(
        SAEnum(GroupPriority), default=GroupPriority.NORMAL, nullable=False
    )
    comment: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

Index("idx_group_assignment", AssignmentGroupORM.assignment_id)
Index("idx_group_start_end", AssignmentGroupORM.start_date, AssignmentGroupORM.end_date)
