# app/api/v1/robots.py
import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.errors import BadRequestError, ConflictError, NotFoundError
from app.core.rbac import require_admin
from app.crud.customer import customer_crud
from app.crud.inspection import inspection_crud
from app.crud.robot import robot_crud
from app.crud.robot_type import robot_type_crud
from app.db.session import get_db
from app.models.robot import Robot
from app.models.user import User
from app.schemas.robot import AlertCreate, Robot as RobotOut, RobotCreate, RobotUpdate
from app.schemas.token import Message
from app.services.qr import render_qr_png

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_or_404(db: Session, robot_id: int) -> Robot:
    robot = robot_crud.get(db, robot_id)
    if not robot:
        raise NotFoundError("Robot not found", code="ROBOT_NOT_FOUND")
    return robot

def _ensure_robot_type(db: Session, robot_type_id: int | None) -> None:
    if robot_type_id is not None and not robot_type_crud.get(db, robot_type_id):
        raise NotFoundError("Robot type not found", code="ROBOT_TYPE_NOT_FOUND")

@router.get("/", response_model=List[RobotOut])
def list_robots(db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return robot_crud.list(db)

@router.get("/customer/{customer_id}", response_model=List[RobotOut])
def robots_by_customer(customer_id: int = Path(...), db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return robot_crud.list(db, customer_id=customer_id)

@router.get("/{robot_id}", response_model=RobotOut)
def get_robot(robot_id: int = Path(...), db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return _get_or_404(db, robot_id)

@router.post("/", response_model=RobotOut, status_code=201)
def create_robot(body: RobotCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    customer = customer_crud.get(db, body.customer_id)
    if not customer:
        raise NotFoundError("Customer not found", code="CUSTOMER_NOT_FOUND")
    _ensure_robot_type(db, body.robot_type_id)
    if robot_crud.get_by_serial(db, body.serial_number):
        raise BadRequestError("Robot with this serial number already exists", code="DUPLICATE_SERIAL")
    robot = robot_crud.create(db, body)
    logger.info("Robot created: %s for %s", robot.serial_number, customer.company_name, extra={"user_id": admin.id})
    return robot

@router.put("/{robot_id}", response_model=RobotOut)
def update_robot(
    body: RobotUpdate,
    robot_id: int = Path(...),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    robot = _get_or_404(db, robot_id)
    _ensure_robot_type(db, body.robot_type_id)
    robot_crud.update(db, robot, body)
    logger.info("Robot updated: %s", robot.serial_number, extra={"user_id": admin.id})
    return robot

@router.delete("/{robot_id}", response_model=Message)
def delete_robot(robot_id: int = Path(...), db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    robot = _get_or_404(db, robot_id)
    if inspection_crud.exists_for(db, robot_id=robot.id):
        raise ConflictError("Robot still has inspections recorded", code="ROBOT_HAS_INSPECTIONS")
    robot_crud.remove(db, robot.id)
    logger.info("Robot deleted: %s", robot.serial_number, extra={"user_id": admin.id})
    return Message(message="Robot deleted successfully")

# --------------------------------------------------------------------------- #
# QR code / alertas
# --------------------------------------------------------------------------- #

@router.post("/{robot_id}/qr-code", response_model=RobotOut)
def generate_qr_code(robot_id: int = Path(...), db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    robot = _get_or_404(db, robot_id)
    if not robot.qr_code:
        robot.generate_qr_code()
        robot_crud.save(db, robot)
    return robot

@router.get("/{robot_id}/qr-code.png")
def qr_code_png(robot_id: int = Path(...), db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    robot = _get_or_404(db, robot_id)
    if not robot.qr_code:
        raise NotFoundError("QR code not generated for this robot", code="QR_CODE_NOT_FOUND")
    return Response(content=render_qr_png(robot.qr_code), media_type="image/png")

@router.post("/{robot_id}/alerts", response_model=RobotOut, status_code=201)
def add_alert(body: AlertCreate, robot_id: int = Path(...), db: Session = Depends(get_db),
              _: User = Depends(get_current_user)):
    robot = _get_or_404(db, robot_id)
    robot.add_alert(body.type, body.message, body.severity)
    return robot_crud.save(db, robot)

@router.post("/{robot_id}/alerts/{index}/acknowledge", response_model=RobotOut)
def acknowledge_alert(robot_id: int = Path(...), index: int = Path(..., ge=0), db: Session = Depends(get_db),
                      _: User = Depends(get_current_user)):
    robot = _get_or_404(db, robot_id)
    if robot.acknowledge_alert(index) is None:
        raise NotFoundError("Alert not found", code="ALERT_NOT_FOUND")
    return robot_crud.save(db, robot)
