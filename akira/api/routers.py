from fastapi import APIRouter
from akira.api.resize import resize_router
from akira.api.system import system_router

api = APIRouter()

api.include_router(system_router, tags=['System'])
api.include_router(resize_router, tags=['Resize'])
