from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.errors import NotFoundError, ValidationError
from tracker.models.application import Application
from tracker.services.application_service import get_application
from tracker.services.calendar_service import generate_follow_up_ics

router = APIRouter(tags=["calendar"])


@router.get("/applications/{application_id}/calendar")
async def application_calendar(application_id: int, db: Session = Depends(get_db)):
    application = get_application(db, application_id)
    if not application.follow_up_date:
        raise ValidationError("followUpDate", "Application has no follow-up date set")

    return Response(
        content=generate_follow_up_ics([application]),
        media_type="text/calendar",
        headers={"Content-Disposition": f'attachment; filename="follow_up_{application_id}.ics"'},
    )


@router.get("/calendar/follow-ups")
async def pending_follow_ups(db: Session = Depends(get_db)):
    applications = (
        db.query(Application)
        .filter(Application.follow_up_date.isnot(None))
        .filter(Application.follow_up_done.is_(False))
        .order_by(Application.follow_up_date.asc())
        .all()
    )
    if not applications:
        raise NotFoundError("No pending follow-ups")

    return Response(
        content=generate_follow_up_ics(applications),
        media_type="text/calendar",
        headers={"Content-Disposition": 'attachment; filename="follow_ups.ics"'},
    )
