"""
Reports of products which users scanned but could not find in the catalog.
A report is a bare event: external id plus timestamp, with no link to any
product description and no lifecycle beyond create and delete.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from productdb import models
from productdb.core.errors import NotFoundError, ValidationError
from productdb.schemas.missing_product import MissingProduct
from productdb.services.description_mapper import as_utc

logger = logging.getLogger(__name__)


def report_missing(
    db: Session, product_id: str, date: Optional[datetime] = None
) -> Tuple[int, datetime]:
    if not product_id:
        raise ValidationError("The product id of a missing product report is required")

    date = as_utc(date or datetime.now(timezone.utc))
    logger.info(f"[MISSING] Report missing product with id: {product_id} with timestamp {date}")

    try:
        report = models.MissingProductReport(product_id=product_id, date=date)
        db.add(report)
        db.flush()
        report_id = report.id
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"[MISSING] Failed to report missing product: {e}", exc_info=True)
        raise

    logger.info(f"[MISSING] Reported missing product with id: {product_id} as {report_id}")
    return report_id, date


def get_missing(db: Session, report_id: int) -> Optional[MissingProduct]:
    logger.debug(f"[MISSING] Get missing product with id: {report_id}")

    report = (
        db.query(models.MissingProductReport)
        .filter(models.MissingProductReport.id == report_id)
        .first()
    )
    if report is None:
        logger.debug(f"[MISSING] No missing product with id: {report_id}")
        return None

    return MissingProduct(product_id=report.product_id, date=as_utc(report.date))


def delete_missing(db: Session, report_id: int) -> None:
    logger.info(f"[MISSING] Delete reported missing product with id: {report_id}")

    report = (
        db.query(models.MissingProductReport)
        .filter(models.MissingProductReport.id == report_id)
        .first()
    )
    if report is None:
        raise NotFoundError(f"No missing product report with id {report_id}")

    try:
        db.delete(report)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"[MISSING] Failed to delete reported missing product: {e}", exc_info=True)
        raise

    logger.info(f"[MISSING] Deleted reported missing product with id: {report_id}")
