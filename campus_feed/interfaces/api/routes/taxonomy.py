"""Routes exposing the branch, year and semester registration hierarchy."""

from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from campus_feed.application.use_cases.taxonomy import (
    check_combination as check_combination_uc,
    list_active_branches as list_active_branches_uc,
    list_active_semesters as list_active_semesters_uc,
    list_active_years as list_active_years_uc,
    set_active as set_active_uc,
)
from campus_feed.domain.entities import User
from campus_feed.infrastructure.database import get_db
from campus_feed.interfaces.api.dependencies import require_admin
from campus_feed.interfaces.api.errors import DOMAIN_ERRORS, to_http_exception
from campus_feed.interfaces.api.schemas import (
    ActivationUpdate,
    BranchRead,
    BranchSemesterRead,
    BranchYearRead,
    CombinationStatusRead,
)

router = APIRouter(prefix="/taxonomy", tags=["taxonomy"])


@router.get("/branches", response_model=list[BranchRead])
def list_branches(db: Session = Depends(get_db)):
    """Return the branches open for registration."""

    return [BranchRead.model_validate(branch) for branch in list_active_branches_uc(db)]


@router.get("/branches/{branch_id}/years", response_model=list[BranchYearRead])
def list_years(branch_id: UUID, db: Session = Depends(get_db)):
    return [BranchYearRead.model_validate(year) for year in list_active_years_uc(db, branch_id)]


@router.get(
    "/branches/{branch_id}/years/{year_number}/semesters",
    response_model=list[BranchSemesterRead],
)
def list_semesters(
    branch_id: UUID,
    year_number: int = Path(..., ge=1, le=4),
    db: Session = Depends(get_db),
):
    semesters = list_active_semesters_uc(db, branch_id, year_number)
    return [BranchSemesterRead.model_validate(semester) for semester in semesters]


@router.get("/eligibility", response_model=CombinationStatusRead)
def check_eligibility(
    branch_id: UUID,
    year_number: int | None = Query(None, ge=1, le=4),
    semester_number: int | None = Query(None, ge=1, le=8),
    db: Session = Depends(get_db),
):
    """Report whether a branch/year/semester combination accepts registrations."""

    status_ = check_combination_uc(db, branch_id, year_number, semester_number)
    return CombinationStatusRead.model_validate(status_)


@router.put("/{kind}/{entity_id}/active")
def set_active(
    activation: ActivationUpdate,
    entity_id: UUID,
    kind: str = Path(..., pattern="^(branch|year|semester)$"),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Open or close a branch, year or semester for registration."""

    try:
        entity = set_active_uc(db, kind, entity_id, activation.is_active)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return {"kind": kind, "id": str(entity.id), "is_active": entity.is_active}
