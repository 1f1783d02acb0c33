import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from tracker.models.application import Application
from tracker.services.application_service import create_application
from tracker.utils.timestamps import utcnow

logger = logging.getLogger(__name__)

DEMO_APPLICATIONS = [
    {
        "company_name": "Tech Corp",
        "job_title": "Senior Frontend Engineer",
        "location": "San Francisco, CA",
        "days_ago": 10,
        "status": "Interviewing",
        "priority": "High",
        "sponsorship_status": "Offered",
        "work_authorization": "H1B",
        "salary_range": "$160k - $200k",
        "notes": "First round went well. Waiting for system design round.",
    },
    {
        "company_name": "Startup Inc",
        "job_title": "Full Stack Developer",
        "location": "Remote",
        "days_ago": 2,
        "status": "Applied",
        "priority": "Medium",
        "sponsorship_status": "Not offered",
        "work_authorization": "Green Card",
        "notes": "Applied via LinkedIn.",
    },
    {
        "company_name": "Big Data Co",
        "job_title": "Data Engineer",
        "location": "New York, NY",
        "days_ago": 30,
        "status": "Rejected",
        "priority": "Low",
        "sponsorship_status": "Required",
        "work_authorization": "H1B",
        "notes": "Automated rejection email.",
    },
    {
        "company_name": "Cloud Systems",
        "job_title": "DevOps Engineer",
        "location": "Austin, TX",
        "days_ago": 45,
        "status": "Offer",
        "priority": "High",
        "sponsorship_status": "Offered",
        "work_authorization": "H1B",
        "salary_range": "$150k",
        "notes": "Offer received! Deadline next Friday.",
    },
    {
        "company_name": "Future AI",
        "job_title": "ML Ops Engineer",
        "location": "Seattle, WA",
        "days_ago": 14,
        "status": "Applied",
        "priority": "High",
        "sponsorship_status": "Unknown",
        "work_authorization": "F1",
        "follow_up_days_ago": 2,  # overdue
        "notes": "Reach out to recruiter if no response by Monday.",
    },
]


def seed_demo_applications(db: Session, now: datetime | None = None) -> int:
    """Insert the demo applications if the store is empty. Returns the number inserted."""
    if db.query(Application).first() is not None:
        return 0

    now = now or utcnow()
    for demo in DEMO_APPLICATIONS:
        data = dict(demo)
        data["date_applied"] = now - timedelta(days=data.pop("days_ago"))
        follow_up_days_ago = data.pop("follow_up_days_ago", None)
        if follow_up_days_ago is not None:
            data["follow_up_date"] = now - timedelta(days=follow_up_days_ago)
        create_application(db, data)

    logger.info("Seeded %d demo applications.", len(DEMO_APPLICATIONS))
    return len(DEMO_APPLICATIONS)
