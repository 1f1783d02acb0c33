from sqlalchemy import Boolean, Column, Integer, Text
from tracker.database import Base

STATUSES = ("Applied", "Interviewing", "Offer", "Rejected")
PRIORITIES = ("Low", "Medium", "High")
SPONSORSHIP_STATUSES = ("Not needed", "Required", "Offered", "Not offered", "Unknown")
WORK_AUTHORIZATIONS = ("H1B", "OPT", "CPT", "F1", "Green Card", "Citizen", "Other")

# Higher rank sorts first
PRIORITY_RANK = {"High": 3, "Medium": 2, "Low": 1}


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(Text, nullable=False)
    job_title = Column(Text, nullable=False)
    location = Column(Text)
    job_link = Column(Text)
    date_applied = Column(Text, nullable=False)
    status = Column(Text, nullable=False, default="Applied")
    priority = Column(Text, nullable=False, default="Medium")
    salary_range = Column(Text)
    notes = Column(Text)
    sponsorship_status = Column(Text, nullable=False, default="Unknown")
    work_authorization = Column(Text, nullable=False, default="F1")
    sponsorship_notes = Column(Text)
    follow_up_date = Column(Text)
    follow_up_done = Column(Boolean, nullable=False, default=False)
