import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from tracker.config import settings


class Base(DeclarativeBase):
    pass


def _unicode_lower(value):
    # SQLite lower() only folds ASCII
    return value.casefold() if isinstance(value, str) else value


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    dbapi_conn.create_function("unicode_lower", 1, _unicode_lower, deterministic=True)
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- APPLICATIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS applications (
    id                 INTEGER PRIMARY KEY AUTOINCREMENT,
    company_name       TEXT NOT NULL CHECK(length(company_name) > 0),
    job_title          TEXT NOT NULL CHECK(length(job_title) > 0),
    location           TEXT,
    job_link           TEXT,
    date_applied       TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S.000000Z','now')),
    status             TEXT NOT NULL DEFAULT 'Applied'
                       CHECK(status IN ('Applied','Interviewing','Offer','Rejected')),
    priority           TEXT NOT NULL DEFAULT 'Medium'
                       CHECK(priority IN ('Low','Medium','High')),
    salary_range       TEXT,
    notes              TEXT,
    sponsorship_status TEXT NOT NULL DEFAULT 'Unknown'
                       CHECK(sponsorship_status IN ('Not needed','Required','Offered',
                                                    'Not offered','Unknown')),
    work_authorization TEXT NOT NULL DEFAULT 'F1'
                       CHECK(work_authorization IN ('H1B','OPT','CPT','F1',
                                                    'Green Card','Citizen','Other')),
    sponsorship_notes  TEXT,
    follow_up_date     TEXT,
    follow_up_done     INTEGER NOT NULL DEFAULT 0 CHECK(follow_up_done IN (0, 1))
);

CREATE INDEX IF NOT EXISTS idx_applications_status ON applications(status);
CREATE INDEX IF NOT EXISTS idx_applications_sponsorship ON applications(sponsorship_status);
CREATE INDEX IF NOT EXISTS idx_applications_date_applied ON applications(date_applied);
CREATE INDEX IF NOT EXISTS idx_applications_follow_up ON applications(follow_up_date);
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    conn.close()
