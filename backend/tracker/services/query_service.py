import logging

from sqlalchemy import Text, case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from tracker.errors import StoreUnavailableError
from tracker.models.application import Application, PRIORITY_RANK
from tracker.schemas.application import ApplicationFilters

logger = logging.getLogger(__name__)

SORT_KEYS = ("newest", "followUp", "priority")
DEFAULT_SORT = "newest"


def _order_by(sort: str | None) -> list:
    newest = [Application.date_applied.desc(), Application.id.desc()]
    if sort == "followUp":
        # Records without a follow-up date go last
        return [
            Application.follow_up_date.is_(None),
            Application.follow_up_date.asc(),
            *newest,
        ]
    if sort == "priority":
        rank = case(PRIORITY_RANK, value=Application.priority, else_=0)
        return [rank.desc(), *newest]
    return newest


def build_application_query(db: Session, filters: ApplicationFilters | None = None) -> Query:
    filters = filters or ApplicationFilters()
    query = db.query(Application)

    search = (filters.search or "").strip().casefold()
    if search:
        # Literal substring: % and _ in the search text are escaped
        query = query.filter(
            func.unicode_lower(Application.company_name, type_=Text).contains(search, autoescape=True)
            | func.unicode_lower(Application.job_title, type_=Text).contains(search, autoescape=True)
        )
    if filters.status:
        query = query.filter(Application.status == filters.status)
    if filters.sponsorship_status:
        query = query.filter(Application.sponsorship_status == filters.sponsorship_status)

    return query.order_by(*_order_by(filters.sort))


def list_applications(db: Session, filters: ApplicationFilters | None = None) -> list[Application]:
    try:
        return build_application_query(db, filters).all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to list applications")
        raise StoreUnavailableError("Failed to retrieve applications") from exc
