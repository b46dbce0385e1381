# app/crud/inspection.py
import logging
from typing import Any, Dict, List

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.crud.base import CRUDBase
from app.models.inspection import Inspection, InspectionStatus
from app.models.robot import Robot
from app.schemas.inspection import InspectionCreate, InspectionUpdate

logger = logging.getLogger(__name__)

class CRUDInspection(CRUDBase[Inspection, InspectionCreate, InspectionUpdate]):
    updatable_fields = ("checklist", "summary", "overall_status", "recommendations", "next_maintenance_date")

    def before_save(self, db: Session, obj: Inspection) -> None:
        obj.recalculate()

    def save(self, db: Session, obj: Inspection) -> Inspection:
        self.before_save(db, obj)
        db.add(obj); db.commit(); db.refresh(obj)
        return obj

    def list(self, db: Session, *, robot_id: int | None = None, customer_id: int | None = None) -> List[Inspection]:
        stmt = select(Inspection).order_by(Inspection.start_time.desc(), Inspection.id.desc())
        if robot_id is not None:
            stmt = stmt.where(Inspection.robot_id == robot_id)
        if customer_id is not None:
            stmt = stmt.where(Inspection.customer_id == customer_id)
        return list(db.scalars(stmt).all())

    def exists_for(self, db: Session, *, robot_id: int | None = None, customer_id: int | None = None) -> bool:
        stmt = select(Inspection.id)
        if robot_id is not None:
            stmt = stmt.where(Inspection.robot_id == robot_id)
        if customer_id is not None:
            stmt = stmt.where(Inspection.customer_id == customer_id)
        return db.scalar(stmt.limit(1)) is not None

    def complete(self, db: Session, obj: Inspection, signature: str | None, summary: str | None) -> Inspection:
        obj.complete(signature, summary, next_maintenance_days=settings.DEFAULT_MAINTENANCE_FREQUENCY_DAYS)
        robot: Robot | None = obj.robot
        if robot is None:
            logger.warning("Inspection %s completed without a robot; schedule not updated", obj.id)
            return self.save(db, obj)
        # próxima manutenção do robô segue a frequência do contrato do cliente
        frequency = (robot.customer.maintenance_frequency if robot.customer else None) \
            or settings.DEFAULT_MAINTENANCE_FREQUENCY_DAYS
        robot.record_maintenance(frequency, when=obj.end_time)
        db.add(robot)
        return self.save(db, obj)

    def stats(self, db: Session) -> Dict[str, Any]:
        completed = InspectionStatus.completed.value
        in_progress = InspectionStatus.in_progress.value
        row = db.execute(
            select(
                func.count(Inspection.id),
                func.sum(case((Inspection.status == completed, 1), else_=0)),
                func.sum(case((Inspection.status == in_progress, 1), else_=0)),
                func.avg(Inspection.duration),
                func.sum(Inspection.issues_found),
                func.avg(Inspection.issues_found),
            )
        ).one()
        total, n_completed, n_progress, avg_duration, total_issues, avg_issues = row
        return {
            "total_inspections": total or 0,
            "completed_inspections": n_completed or 0,
            "in_progress_inspections": n_progress or 0,
            "average_duration": float(avg_duration) if avg_duration is not None else None,
            "total_issues": total_issues or 0,
            "average_issues": float(avg_issues) if avg_issues is not None else None,
        }

inspection_crud = CRUDInspection(Inspection)
