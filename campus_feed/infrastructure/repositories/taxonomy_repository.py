"""Persistence layer for the branch, year and semester hierarchy."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from campus_feed.domain.entities import (
    TAXONOMY_BRANCH,
    TAXONOMY_SEMESTER,
    TAXONOMY_YEAR,
    Branch,
    BranchSemester,
    BranchYear,
)
from campus_feed.infrastructure.models import (
    BranchModel,
    BranchSemesterModel,
    BranchYearModel,
)

_MODELS_BY_KIND = {
    TAXONOMY_BRANCH: BranchModel,
    TAXONOMY_YEAR: BranchYearModel,
    TAXONOMY_SEMESTER: BranchSemesterModel,
}


class TaxonomyRepository:
    """Read and toggle the registration hierarchy."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_branch(self, branch_id: UUID) -> Branch | None:
        model = self.session.get(BranchModel, branch_id)
        return self._branch_to_entity(model) if model else None

    def get_branch_by_code(self, code: str) -> Branch | None:
        model = self.session.query(BranchModel).filter(BranchModel.code == code).first()
        return self._branch_to_entity(model) if model else None

    def get_year(self, branch_id: UUID, year_number: int) -> BranchYear | None:
        model = (
            self.session.query(BranchYearModel)
            .filter(
                BranchYearModel.branch_id == branch_id,
                BranchYearModel.year_number == year_number,
            )
            .first()
        )
        return self._year_to_entity(model) if model else None

    def get_semester(
        self, branch_id: UUID, year_number: int, semester_number: int
    ) -> BranchSemester | None:
        model = (
            self.session.query(BranchSemesterModel)
            .filter(
                BranchSemesterModel.branch_id == branch_id,
                BranchSemesterModel.year_number == year_number,
                BranchSemesterModel.semester_number == semester_number,
            )
            .first()
        )
        return self._semester_to_entity(model) if model else None

    def list_active_branches(self) -> Sequence[Branch]:
        query = (
            self.session.query(BranchModel)
            .filter(BranchModel.is_active.is_(True))
            .order_by(BranchModel.display_order.asc(), BranchModel.code.asc())
        )
        return [self._branch_to_entity(model) for model in query.all()]

    def list_active_years(self, branch_id: UUID) -> Sequence[BranchYear]:
        query = (
            self.session.query(BranchYearModel)
            .join(BranchModel, BranchYearModel.branch_id == BranchModel.id)
            .filter(BranchYearModel.branch_id == branch_id)
            .filter(BranchYearModel.is_active.is_(True))
            .filter(BranchModel.is_active.is_(True))
            .order_by(BranchYearModel.display_order.asc(), BranchYearModel.year_number.asc())
        )
        return [self._year_to_entity(model) for model in query.all()]

    def list_active_semesters(self, branch_id: UUID, year_number: int) -> Sequence[BranchSemester]:
        query = (
            self.session.query(BranchSemesterModel)
            .join(BranchYearModel, BranchSemesterModel.branch_year_id == BranchYearModel.id)
            .join(BranchModel, BranchSemesterModel.branch_id == BranchModel.id)
            .filter(BranchSemesterModel.branch_id == branch_id)
            .filter(BranchSemesterModel.year_number == year_number)
            .filter(BranchSemesterModel.is_active.is_(True))
            .filter(BranchYearModel.is_active.is_(True))
            .filter(BranchModel.is_active.is_(True))
            .order_by(
                BranchSemesterModel.display_order.asc(),
                BranchSemesterModel.semester_number.asc(),
            )
        )
        return [self._semester_to_entity(model) for model in query.all()]

    def set_active(
        self, kind: str, entity_id: UUID, active: bool
    ) -> Branch | BranchYear | BranchSemester | None:
        """Toggle the activation flag; returns ``None`` when the row does not exist."""

        model_class = _MODELS_BY_KIND[kind]
        model = self.session.get(model_class, entity_id)
        if model is None:
            return None
        model.is_active = active
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        if kind == TAXONOMY_BRANCH:
            return self._branch_to_entity(model)
        if kind == TAXONOMY_YEAR:
            return self._year_to_entity(model)
        return self._semester_to_entity(model)

    def create_branch(self, branch: Branch) -> Branch:
        model = BranchModel(
            code=branch.code,
            name=branch.name,
            is_active=branch.is_active,
            display_order=branch.display_order,
        )
        if branch.id is not None:
            model.id = branch.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._branch_to_entity(model)

    def create_year(self, year: BranchYear) -> BranchYear:
        model = BranchYearModel(
            branch_id=year.branch_id,
            year_number=year.year_number,
            is_active=year.is_active,
            display_order=year.display_order,
        )
        if year.id is not None:
            model.id = year.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._year_to_entity(model)

    def create_semester(self, semester: BranchSemester) -> BranchSemester:
        model = BranchSemesterModel(
            branch_year_id=semester.branch_year_id,
            branch_id=semester.branch_id,
            year_number=semester.year_number,
            semester_number=semester.semester_number,
            label=semester.label,
            is_active=semester.is_active,
            display_order=semester.display_order,
        )
        if semester.id is not None:
            model.id = semester.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._semester_to_entity(model)

    @staticmethod
    def _branch_to_entity(model: BranchModel) -> Branch:
        return Branch(
            id=model.id,
            code=model.code,
            name=model.name,
            is_active=bool(model.is_active),
            display_order=model.display_order,
        )

    @staticmethod
    def _year_to_entity(model: BranchYearModel) -> BranchYear:
        return BranchYear(
            id=model.id,
            branch_id=model.branch_id,
            year_number=model.year_number,
            is_active=bool(model.is_active),
            display_order=model.display_order,
        )

    @staticmethod
    def _semester_to_entity(model: BranchSemesterModel) -> BranchSemester:
        return BranchSemester(
            id=model.id,
            branch_year_id=model.branch_year_id,
            branch_id=model.branch_id,
            year_number=model.year_number,
            semester_number=model.semester_number,
            label=model.label,
            is_active=bool(model.is_active),
            display_order=model.display_order,
        )


__all__ = ["TaxonomyRepository"]
