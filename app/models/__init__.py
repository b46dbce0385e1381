# Carrega módulos para registrar tabelas no metadata (Alembic / create_all)
from app.models.user import User, UserRole  # noqa: F401
from app.models.customer import Customer, customer_technicians  # noqa: F401
from app.models.robot_type import RobotType  # noqa: F401
from app.models.robot import Robot  # noqa: F401
from app.models.inspection import Inspection  # noqa: F401
from app.models.file import File  # noqa: F401
