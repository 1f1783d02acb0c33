from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.schemas.analytics import DashboardStats
from tracker.services.stats_service import get_dashboard_stats

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/dashboard", response_model=DashboardStats)
async def dashboard(db: Session = Depends(get_db)):
    return get_dashboard_stats(db)
