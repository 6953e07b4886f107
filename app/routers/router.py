from fastapi import APIRouter
from app.routers.auth import AuthRouter
from app.routers.users import UsersRouter
from app.routers.utils import UtilsRouter

router = APIRouter(prefix="/api")

AuthRouter(router)
UsersRouter(router)

utils_router = APIRouter()

UtilsRouter(utils_router)
