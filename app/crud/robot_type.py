# app/crud/robot_type.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.robot_type import RobotType
from app.schemas.robot_type import RobotTypeCreate, RobotTypeUpdate

class CRUDRobotType(CRUDBase[RobotType, RobotTypeCreate, RobotTypeUpdate]):
    def list_active(self, db: Session) -> List[RobotType]:
        stmt = select(RobotType).where(RobotType.is_active.is_(True)).order_by(RobotType.name)
        return list(db.scalars(stmt).all())

    def get_by_name(self, db: Session, name: str) -> Optional[RobotType]:
        return db.execute(select(RobotType).where(RobotType.name == name)).scalar_one_or_none()

    def deactivate(self, db: Session, obj: RobotType) -> RobotType:
        obj.is_active = False
        db.add(obj); db.commit(); db.refresh(obj)
        return obj

robot_type_crud = CRUDRobotType(RobotType)
