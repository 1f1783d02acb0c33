import csv
import io

from sqlalchemy.orm import Session

from tracker.models.application import Application

CSV_COLUMNS = [
    "id", "company_name", "job_title", "location", "job_link", "date_applied",
    "status", "priority", "salary_range", "notes", "sponsorship_status",
    "work_authorization", "sponsorship_notes", "follow_up_date", "follow_up_done",
]


def export_applications_csv(db: Session) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_COLUMNS)

    rows = db.query(Application).order_by(Application.date_applied.desc(), Application.id.desc())
    for row in rows:
        writer.writerow([getattr(row, column) for column in CSV_COLUMNS])

    return output.getvalue()
