from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.errors import ValidationError
from tracker.models.application import SPONSORSHIP_STATUSES, STATUSES
from tracker.schemas.application import (
    ApplicationCreate,
    ApplicationFilters,
    ApplicationResponse,
    ApplicationUpdate,
)
from tracker.services import application_service, query_service

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("", response_model=list[ApplicationResponse])
async def list_applications(
    search: str | None = None,
    status: str | None = None,
    sponsorship_status: str | None = Query(None, alias="sponsorshipStatus"),
    sort: str | None = None,
    db: Session = Depends(get_db),
):
    if status and status not in STATUSES:
        raise ValidationError("status", f"Invalid status. Must be one of: {', '.join(STATUSES)}")
    if sponsorship_status and sponsorship_status not in SPONSORSHIP_STATUSES:
        raise ValidationError(
            "sponsorshipStatus",
            f"Invalid sponsorshipStatus. Must be one of: {', '.join(SPONSORSHIP_STATUSES)}",
        )

    filters = ApplicationFilters(
        search=search,
        status=status,
        sponsorship_status=sponsorship_status,
        sort=sort,
    )
    return query_service.list_applications(db, filters)


@router.post("", response_model=ApplicationResponse, status_code=201)
async def create_application(req: ApplicationCreate, db: Session = Depends(get_db)):
    return application_service.create_application(db, req.model_dump())


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: int, db: Session = Depends(get_db)):
    return application_service.get_application(db, application_id)


@router.put("/{application_id}", response_model=ApplicationResponse)
async def update_application(application_id: int, req: ApplicationUpdate, db: Session = Depends(get_db)):
    changes = req.model_dump(exclude_unset=True)
    return application_service.update_application(db, application_id, changes)


@router.delete("/{application_id}", status_code=204)
async def delete_application(application_id: int, db: Session = Depends(get_db)):
    application_service.delete_application(db, application_id)
    return Response(status_code=204)
