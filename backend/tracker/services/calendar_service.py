from datetime import timedelta
from typing import Iterable

from icalendar import Calendar, Event, Alarm

from tracker.utils.timestamps import parse_timestamp


def _follow_up_event(application) -> Event:
    event = Event()
    event.add("uid", f"follow-up-{application.id}@jobtracker")
    event.add("summary", f"Follow up: {application.job_title} at {application.company_name}")

    day = parse_timestamp(application.follow_up_date).date()
    event.add("dtstart", day)
    event.add("dtend", day + timedelta(days=1))

    description_parts = []
    if application.job_link:
        description_parts.append(f"Job URL: {application.job_link}")
    if application.notes:
        description_parts.append(f"Notes: {application.notes}")
    if description_parts:
        event.add("description", "\n".join(description_parts))

    # Reminder on the morning of the follow-up
    alarm = Alarm()
    alarm.add("action", "DISPLAY")
    alarm.add("trigger", timedelta(hours=9))
    alarm.add("description", f"Follow-up reminder: {application.company_name}")
    event.add_component(alarm)
    return event


def generate_follow_up_ics(applications: Iterable) -> bytes:
    cal = Calendar()
    cal.add("prodid", "-//JobTracker//EN")
    cal.add("version", "2.0")

    for application in applications:
        if application.follow_up_date:
            cal.add_component(_follow_up_event(application))
    return cal.to_ical()
