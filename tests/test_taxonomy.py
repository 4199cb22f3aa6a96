"""Tests for the branch, year and semester hierarchy."""

from __future__ import annotations

from uuid import uuid4

import pytest

from campus_feed.application.use_cases.taxonomy import (
    check_combination,
    list_active_branches,
    list_active_semesters,
    list_active_years,
    seed_branch,
    set_active,
)
from campus_feed.application.use_cases.taxonomy.eligibility import (
    MESSAGE_AVAILABLE,
    MESSAGE_BRANCH_CLOSED,
    MESSAGE_SEMESTER_CLOSED,
    MESSAGE_YEAR_CLOSED,
)
from campus_feed.domain.exceptions import NotFound
from campus_feed.infrastructure.repositories import TaxonomyRepository


def test_seed_branch_builds_full_structure(session, branch) -> None:
    years = list_active_years(session, branch.id)

    assert [year.year_number for year in years] == [1, 2, 3, 4]
    semesters = list_active_semesters(session, branch.id, 3)
    assert [semester.semester_number for semester in semesters] == [5, 6]
    assert semesters[0].label == "Semester 5"


def test_seed_branch_is_idempotent(session, branch) -> None:
    again = seed_branch(session, code="CSE", name="Computer Science")

    assert again.id == branch.id
    assert len(list_active_years(session, branch.id)) == 4
    assert [b.code for b in list_active_branches(session)] == ["CSE"]


def test_closed_branch_hides_its_children(session, branch) -> None:
    other = seed_branch(session, code="ME", name="Mechanical", display_order=2)

    updated = set_active(session, "branch", branch.id, False)

    assert updated.is_active is False
    assert [b.id for b in list_active_branches(session)] == [other.id]
    assert list_active_years(session, branch.id) == []
    assert list_active_semesters(session, branch.id, 1) == []


def test_closed_year_hides_its_semesters(session, branch) -> None:
    year = TaxonomyRepository(session).get_year(branch.id, 2)

    set_active(session, "year", year.id, False)

    assert [y.year_number for y in list_active_years(session, branch.id)] == [1, 3, 4]
    assert list_active_semesters(session, branch.id, 2) == []


def test_check_combination_reports_first_closed_level(session, branch) -> None:
    repository = TaxonomyRepository(session)

    status = check_combination(session, branch.id, 1, 2)
    assert status.can_select is True
    assert status.message == MESSAGE_AVAILABLE

    semester = repository.get_semester(branch.id, 1, 2)
    set_active(session, "semester", semester.id, False)
    status = check_combination(session, branch.id, 1, 2)
    assert status.can_select is False
    assert status.semester_active is False
    assert status.message == MESSAGE_SEMESTER_CLOSED

    year = repository.get_year(branch.id, 1)
    set_active(session, "year", year.id, False)
    assert check_combination(session, branch.id, 1, 2).message == MESSAGE_YEAR_CLOSED

    set_active(session, "branch", branch.id, False)
    status = check_combination(session, branch.id)
    assert status.branch_active is False
    assert status.message == MESSAGE_BRANCH_CLOSED


def test_semester_is_only_checked_with_a_year(session, branch) -> None:
    semester = TaxonomyRepository(session).get_semester(branch.id, 1, 1)
    set_active(session, "semester", semester.id, False)

    status = check_combination(session, branch.id, semester_number=1)

    assert status.can_select is True
    assert status.semester_active is True


def test_unknown_rows_count_as_inactive(session) -> None:
    status = check_combination(session, uuid4(), 1, 1)

    assert status.can_select is False
    assert status.branch_active is False


def test_set_active_validation(session, branch) -> None:
    with pytest.raises(ValueError):
        set_active(session, "faculty", branch.id, False)
    with pytest.raises(NotFound):
        set_active(session, "year", uuid4(), False)
