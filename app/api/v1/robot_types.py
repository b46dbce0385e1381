# app/api/v1/robot_types.py
import logging
from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.errors import BadRequestError, NotFoundError
from app.core.rbac import require_admin
from app.crud.robot_type import robot_type_crud
from app.db.session import get_db
from app.models.robot_type import DEFAULT_IMAGE, RobotType
from app.models.user import User
from app.schemas.robot_type import RobotType as RobotTypeOut, RobotTypeCreate, RobotTypeUpdate
from app.schemas.token import Message

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_or_404(db: Session, type_id: int) -> RobotType:
    obj = robot_type_crud.get(db, type_id)
    if not obj:
        raise NotFoundError("Robot type not found", code="ROBOT_TYPE_NOT_FOUND")
    return obj

def _ensure_unique_name(db: Session, name: str, exclude_id: int | None = None) -> None:
    found = robot_type_crud.get_by_name(db, name)
    if found and found.id != exclude_id:
        raise BadRequestError("Robot type with this name already exists", code="DUPLICATE_NAME")

@router.get("/", response_model=List[RobotTypeOut])
def list_robot_types(db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return robot_type_crud.list_active(db)

@router.get("/{type_id}", response_model=RobotTypeOut)
def get_robot_type(type_id: int = Path(...), db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return _get_or_404(db, type_id)

@router.post("/", response_model=RobotTypeOut, status_code=201)
def create_robot_type(body: RobotTypeCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    _ensure_unique_name(db, body.name)
    obj = robot_type_crud.create(db, body, extra={"image": body.image or DEFAULT_IMAGE})
    logger.info("Robot type created: %s", obj.name, extra={"user_id": admin.id})
    return obj

@router.put("/{type_id}", response_model=RobotTypeOut)
def update_robot_type(
    body: RobotTypeUpdate,
    type_id: int = Path(...),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    obj = _get_or_404(db, type_id)
    if body.name:
        _ensure_unique_name(db, body.name, exclude_id=obj.id)
    robot_type_crud.update(db, obj, body)
    logger.info("Robot type updated: %s", obj.name, extra={"user_id": admin.id})
    return obj

@router.delete("/{type_id}", response_model=Message)
def delete_robot_type(type_id: int = Path(...), db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    obj = _get_or_404(db, type_id)
    # soft delete: robôs existentes continuam apontando para o tipo
    robot_type_crud.deactivate(db, obj)
    logger.info("Robot type deactivated: %s", obj.name, extra={"user_id": admin.id})
    return Message(message="Robot type deleted successfully")
