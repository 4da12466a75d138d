"""Production schedule routes (admin)"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...core.production import ProductionOptions, aggregate_production, production_csv
from ...database.connection import get_db
from ...models import OrderStatus
from .deps import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/production", tags=["admin"])


def production_options(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status: str = "all",
    include_archived: bool = False,
) -> ProductionOptions:
    """Query parameters -> ProductionOptions; defaults to the last 7 days"""
    options = ProductionOptions(status_filter=status, include_archived=include_archived)
    if start_date is not None:
        options.start_date = start_date
    if end_date is not None:
        options.end_date = end_date
    if status.lower() != "all" and status.upper() not in OrderStatus.__members__:
        raise HTTPException(status_code=400, detail=f"Unknown status filter: {status}")
    if options.start_date > options.end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")
    return options


def build_schedule(db: Session, options: ProductionOptions) -> dict:
    schedule = aggregate_production(crud.production_orders(db, options), options)
    logger.info(
        "production schedule %s..%s: %d products, %d orders, %d units",
        options.start_date, options.end_date,
        schedule["total_items"], schedule["total_orders"], schedule["summary"]["total_quantity"],
    )
    return schedule


@router.get("", response_model=schemas.ProductionSchedule)
def get_production_schedule(_: models.User = Depends(require_admin),
                            options: ProductionOptions = Depends(production_options),
                            db: Session = Depends(get_db)):
    return build_schedule(db, options)


@router.get("/csv")
def export_production_schedule(_: models.User = Depends(require_admin),
                               options: ProductionOptions = Depends(production_options),
                               db: Session = Depends(get_db)):
    schedule = build_schedule(db, options)
    filename = f"production_{options.start_date.isoformat()}_{options.end_date.isoformat()}.csv"
    return Response(
        content=production_csv(schedule),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("", response_model=schemas.BulkStatusResult)
def bulk_update_status(body: schemas.BulkStatusUpdate, _: models.User = Depends(require_admin),
                       db: Session = Depends(get_db)):
    """Move the orders behind a schedule to a new status"""
    updated = crud.bulk_update_status(db, body.order_ids, body.status)
    return schemas.BulkStatusResult(updated=updated, status=body.status)
