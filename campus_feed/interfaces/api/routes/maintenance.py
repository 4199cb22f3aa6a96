"""Administrative maintenance routes."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_feed.application.use_cases.cleanup import sweep as sweep_uc
from campus_feed.domain.entities import User
from campus_feed.infrastructure.database import get_db
from campus_feed.interfaces.api.dependencies import require_admin
from campus_feed.interfaces.api.schemas import SweepResultRead

router = APIRouter(prefix="/maintenance", tags=["maintenance"])
logger = logging.getLogger(__name__)


@router.post("/sweep", response_model=SweepResultRead)
def run_sweep(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Delete expired notifications, events and opportunities right away."""

    logger.info("Manual sweep requested by %s", current_user.id)
    result = sweep_uc(db)
    return SweepResultRead(deleted=result.deleted, failed=result.failed)
