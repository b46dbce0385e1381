# app/crud/robot.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.robot import Robot
from app.schemas.robot import RobotCreate, RobotUpdate

class CRUDRobot(CRUDBase[Robot, RobotCreate, RobotUpdate]):
    def list(self, db: Session, customer_id: Optional[int] = None) -> List[Robot]:
        stmt = select(Robot).order_by(Robot.serial_number)
        if customer_id is not None:
            stmt = stmt.where(Robot.customer_id == customer_id)
        return list(db.scalars(stmt).all())

    def get_by_serial(self, db: Session, serial_number: str) -> Optional[Robot]:
        stmt = select(Robot).where(Robot.serial_number == serial_number.strip().upper())
        return db.execute(stmt).scalar_one_or_none()

    def save(self, db: Session, robot: Robot) -> Robot:
        db.add(robot); db.commit(); db.refresh(robot)
        return robot

robot_crud = CRUDRobot(Robot)
