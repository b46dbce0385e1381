# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1 import (
    auth,
    users,
    customers,
    robot_types,
    robots,
    inspections,
    files,
)

api_router = APIRouter()

api_router.include_router(auth.router,        prefix="/auth",        tags=["auth"])
api_router.include_router(users.router,       prefix="/users",       tags=["users"])
api_router.include_router(customers.router,   prefix="/customers",   tags=["customers"])
api_router.include_router(robot_types.router, prefix="/robot-types", tags=["robot-types"])
api_router.include_router(robots.router,      prefix="/robots",      tags=["robots"])
api_router.include_router(inspections.router, prefix="/inspections", tags=["inspections"])
api_router.include_router(files.router,       prefix="/files",       tags=["files"])
