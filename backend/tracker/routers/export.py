from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.services.export_service import export_applications_csv

router = APIRouter(tags=["export"])


@router.get("/export/csv")
async def csv_export(db: Session = Depends(get_db)):
    return Response(
        content=export_applications_csv(db),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="applications_export.csv"'},
    )
