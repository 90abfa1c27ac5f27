from models import USER
from routes.crud import build_router
from services import get_user_service

router = build_router(USER, get_user_service)
