# app/api/v1/inspections.py
import logging
from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.errors import BadRequestError, NotFoundError
from app.core.rbac import require_admin
from app.crud.inspection import inspection_crud
from app.crud.robot import robot_crud
from app.crud.user import user_crud
from app.db.session import get_db
from app.models.inspection import Inspection, InspectionStatus
from app.models.user import User
from app.schemas.inspection import (
    Inspection as InspectionOut,
    InspectionCancel,
    InspectionComplete,
    InspectionCreate,
    InspectionStats,
    InspectionUpdate,
    Recommendation,
)
from app.schemas.token import Message

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_or_404(db: Session, inspection_id: int) -> Inspection:
    obj = inspection_crud.get(db, inspection_id)
    if not obj:
        raise NotFoundError("Inspection not found", code="INSPECTION_NOT_FOUND")
    return obj

def _ensure_open(obj: Inspection) -> None:
    if obj.status != InspectionStatus.in_progress.value:
        raise BadRequestError(f"Inspection is already {obj.status}", code="INSPECTION_CLOSED")

@router.get("/", response_model=List[InspectionOut])
def list_inspections(db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return inspection_crud.list(db)

@router.get("/stats", response_model=InspectionStats)
def inspection_stats(db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return inspection_crud.stats(db)

@router.get("/robot/{serial_number}", response_model=List[InspectionOut])
def inspections_by_robot(serial_number: str = Path(...), db: Session = Depends(get_db),
                         _: User = Depends(get_current_user)):
    robot = robot_crud.get_by_serial(db, serial_number)
    if not robot:
        return []
    return inspection_crud.list(db, robot_id=robot.id)

@router.get("/customer/{customer_id}", response_model=List[InspectionOut])
def inspections_by_customer(customer_id: int = Path(...), db: Session = Depends(get_db),
                            _: User = Depends(get_current_user)):
    return inspection_crud.list(db, customer_id=customer_id)

@router.get("/{inspection_id}", response_model=InspectionOut)
def get_inspection(inspection_id: int = Path(...), db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return _get_or_404(db, inspection_id)

@router.post("/", response_model=InspectionOut, status_code=201)
def create_inspection(body: InspectionCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    robot = robot_crud.get(db, body.robot_id)
    if not robot:
        raise NotFoundError("Robot not found", code="ROBOT_NOT_FOUND")
    technician_id = body.technician_id or user.id
    if technician_id != user.id and not user_crud.get(db, technician_id):
        raise NotFoundError("Technician not found", code="USER_NOT_FOUND")
    # cliente vem do robô quando não informado
    obj = inspection_crud.create(
        db, body, extra={"customer_id": body.customer_id or robot.customer_id, "technician_id": technician_id}
    )
    logger.info("Inspection %s started for robot %s", obj.id, robot.serial_number, extra={"user_id": user.id})
    return obj

@router.put("/{inspection_id}", response_model=InspectionOut)
def update_inspection(body: InspectionUpdate, inspection_id: int = Path(...), db: Session = Depends(get_db),
                      _: User = Depends(get_current_user)):
    obj = _get_or_404(db, inspection_id)
    inspection_crud.update(db, obj, body)
    return obj

@router.delete("/{inspection_id}", response_model=Message)
def delete_inspection(inspection_id: int = Path(...), db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    obj = _get_or_404(db, inspection_id)
    inspection_crud.remove(db, obj.id)
    logger.info("Inspection %s deleted", inspection_id, extra={"user_id": admin.id})
    return Message(message="Inspection deleted successfully")

# --------------------------------------------------------------------------- #
# Ciclo de vida
# --------------------------------------------------------------------------- #

@router.post("/{inspection_id}/complete", response_model=InspectionOut)
def complete_inspection(
    inspection_id: int = Path(...),
    body: InspectionComplete | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    obj = _get_or_404(db, inspection_id)
    _ensure_open(obj)
    body = body or InspectionComplete()
    inspection_crud.complete(db, obj, body.signature, body.summary)
    logger.info("Inspection %s completed (%s)", obj.id, obj.overall_status, extra={"user_id": user.id})
    return obj

@router.post("/{inspection_id}/cancel", response_model=InspectionOut)
def cancel_inspection(
    inspection_id: int = Path(...),
    body: InspectionCancel | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    obj = _get_or_404(db, inspection_id)
    _ensure_open(obj)
    obj.cancel(body.reason if body else None)
    inspection_crud.save(db, obj)
    logger.info("Inspection %s cancelled", obj.id, extra={"user_id": user.id})
    return obj

@router.post("/{inspection_id}/recommendations", response_model=InspectionOut, status_code=201)
def add_recommendation(body: Recommendation, inspection_id: int = Path(...), db: Session = Depends(get_db),
                       _: User = Depends(get_current_user)):
    obj = _get_or_404(db, inspection_id)
    obj.add_recommendation(body.model_dump(mode="json", exclude_none=True))
    return inspection_crud.save(db, obj)
