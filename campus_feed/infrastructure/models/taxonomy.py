"""SQLAlchemy models for the branch, year and semester hierarchy."""

from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from campus_feed.infrastructure.database import Base


class BranchModel(Base):
    """Academic branch that students can register for."""

    __tablename__ = "branches"

    id = Column(Uuid, primary_key=True, default=uuid4)
    code = Column(String(10), nullable=False, unique=True)
    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=expression.true())
    display_order = Column(Integer, nullable=False, default=1)

    years = relationship(
        "BranchYearModel",
        back_populates="branch",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class BranchYearModel(Base):
    """Year of study offered inside a branch."""

    __tablename__ = "branch_years"
    __table_args__ = (UniqueConstraint("branch_id", "year_number", name="uq_branch_year"),)

    id = Column(Uuid, primary_key=True, default=uuid4)
    branch_id = Column(
        Uuid, ForeignKey("branches.id", ondelete="CASCADE"), nullable=False, index=True
    )
    year_number = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=expression.true())
    display_order = Column(Integer, nullable=False, default=1)

    branch = relationship("BranchModel", back_populates="years", lazy="joined")
    semesters = relationship(
        "BranchSemesterModel",
        back_populates="branch_year",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class BranchSemesterModel(Base):
    """Semester offered inside a branch year."""

    __tablename__ = "branch_semesters"
    __table_args__ = (
        UniqueConstraint(
            "branch_id", "year_number", "semester_number", name="uq_branch_semester"
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid4)
    branch_year_id = Column(
        Uuid, ForeignKey("branch_years.id", ondelete="CASCADE"), nullable=False, index=True
    )
    branch_id = Column(
        Uuid, ForeignKey("branches.id", ondelete="CASCADE"), nullable=False, index=True
    )
    year_number = Column(Integer, nullable=False)
    semester_number = Column(Integer, nullable=False)
    label = Column(String(50), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=expression.true())
    display_order = Column(Integer, nullable=False, default=1)

    branch_year = relationship("BranchYearModel", back_populates="semesters", lazy="joined")


__all__ = ["BranchModel", "BranchSemesterModel", "BranchYearModel"]
