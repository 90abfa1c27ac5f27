import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from config import get_settings
from database import MongoStore, connect, disconnect
from routes import games, users
from routes.crud import respond

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("boardgames")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A failed ping raises here and aborts startup.
    client = await run_in_threadpool(connect, settings)
    app.state.store = MongoStore(client[settings.database_name])
    logger.info("Environment: %s", settings.environment)
    try:
        yield
    finally:
        disconnect(client)


app = FastAPI(
    title="Games API",
    description="Simple API for managing games",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(games.router)
app.include_router(users.router)


@app.exception_handler(RequestValidationError)
async def malformed_body(request: Request, exc: RequestValidationError):
    """Bodies that are not a JSON object never reach the validator; answer them in the same envelope."""
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return respond(
        status.HTTP_400_BAD_REQUEST,
        success=False,
        message="Invalid request body",
        error=f"{location}: {error['msg']}",
    )


@app.get("/", response_class=PlainTextResponse)
def index():
    return "Hello World"


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
