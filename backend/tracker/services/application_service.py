import logging
from contextlib import contextmanager
from datetime import datetime

from pydantic.alias_generators import to_camel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tracker.errors import NotFoundError, StoreUnavailableError, ValidationError
from tracker.models.application import (
    Application,
    PRIORITIES,
    SPONSORSHIP_STATUSES,
    STATUSES,
    WORK_AUTHORIZATIONS,
)
from tracker.utils.timestamps import format_timestamp, utcnow

logger = logging.getLogger(__name__)

ENUM_FIELDS = {
    "status": STATUSES,
    "priority": PRIORITIES,
    "sponsorship_status": SPONSORSHIP_STATUSES,
    "work_authorization": WORK_AUTHORIZATIONS,
}
REQUIRED_TEXT_FIELDS = ("company_name", "job_title")
NON_NULLABLE_FIELDS = (*REQUIRED_TEXT_FIELDS, *ENUM_FIELDS, "date_applied", "follow_up_done")
TIMESTAMP_FIELDS = ("date_applied", "follow_up_date")


def _validate(data: dict) -> None:
    for key, value in data.items():
        if value is None:
            if key in NON_NULLABLE_FIELDS:
                raise ValidationError(to_camel(key), f"{to_camel(key)} is required")
            continue
        if key in REQUIRED_TEXT_FIELDS and not value.strip():
            raise ValidationError(to_camel(key), f"{to_camel(key)} must not be empty")
        if key in ENUM_FIELDS and value not in ENUM_FIELDS[key]:
            allowed = ", ".join(ENUM_FIELDS[key])
            raise ValidationError(to_camel(key), f"Invalid {to_camel(key)}. Must be one of: {allowed}")


@contextmanager
def _store_errors(db: Session, message: str):
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(message)
        raise StoreUnavailableError(message) from exc


def _normalize_timestamps(data: dict) -> dict:
    for key in TIMESTAMP_FIELDS:
        if isinstance(data.get(key), datetime):
            data[key] = format_timestamp(data[key])
    return data


def create_application(db: Session, data: dict) -> Application:
    data = dict(data)
    data.pop("id", None)
    if data.get("date_applied") is None:
        data["date_applied"] = utcnow()
    for key in REQUIRED_TEXT_FIELDS:
        if key not in data:
            raise ValidationError(to_camel(key), f"{to_camel(key)} is required")
    _validate(data)

    application = Application(**_normalize_timestamps(data))
    with _store_errors(db, "Failed to create application"):
        db.add(application)
        db.commit()
        db.refresh(application)
    return application


def get_application(db: Session, application_id: int) -> Application:
    with _store_errors(db, "Failed to retrieve application"):
        application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        raise NotFoundError()
    return application


def update_application(db: Session, application_id: int, changes: dict) -> Application:
    application = get_application(db, application_id)
    changes = dict(changes)
    changes.pop("id", None)
    _validate(changes)

    for key, value in _normalize_timestamps(changes).items():
        setattr(application, key, value)
    with _store_errors(db, "Failed to update application"):
        db.commit()
        db.refresh(application)
    return application


def delete_application(db: Session, application_id: int) -> None:
    application = get_application(db, application_id)
    with _store_errors(db, "Failed to delete application"):
        db.delete(application)
        db.commit()
