from models import GAME
from routes.crud import build_router
from services import get_game_service

router = build_router(GAME, get_game_service)
