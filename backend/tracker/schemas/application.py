from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApplicationCreate(CamelModel):
    company_name: str
    job_title: str
    location: str | None = None
    job_link: str | None = None
    date_applied: datetime | None = None
    status: str = "Applied"
    priority: str = "Medium"
    salary_range: str | None = None
    notes: str | None = None
    sponsorship_status: str = "Unknown"
    work_authorization: str = "F1"
    sponsorship_notes: str | None = None
    follow_up_date: datetime | None = None
    follow_up_done: bool = False


class ApplicationUpdate(CamelModel):
    company_name: str | None = None
    job_title: str | None = None
    location: str | None = None
    job_link: str | None = None
    date_applied: datetime | None = None
    status: str | None = None
    priority: str | None = None
    salary_range: str | None = None
    notes: str | None = None
    sponsorship_status: str | None = None
    work_authorization: str | None = None
    sponsorship_notes: str | None = None
    follow_up_date: datetime | None = None
    follow_up_done: bool | None = None


class ApplicationResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    company_name: str
    job_title: str
    location: str | None
    job_link: str | None
    date_applied: datetime
    status: str
    priority: str
    salary_range: str | None
    notes: str | None
    sponsorship_status: str
    work_authorization: str
    sponsorship_notes: str | None
    follow_up_date: datetime | None
    follow_up_done: bool


class ApplicationFilters(CamelModel):
    search: str | None = None
    status: str | None = None
    sponsorship_status: str | None = None
    sort: str | None = None
