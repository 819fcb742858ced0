import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wordrace.api.endpoints import api_router
from wordrace.core.config import settings
from wordrace.core.error import DomainErrorCode, WordRaceDomainError
from wordrace.core.logging import setup_logging
from wordrace.core.room_locks import RoomLockManager
from wordrace.db.session import create_engine, create_session_factory, init_db
from wordrace.repositories.memory_repository import MemoryGameRepository
from wordrace.repositories.sql_repository import SqlGameRepository
from wordrace.schemas.common import BaseResponse
from wordrace.services.word_source import WordSource

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Multiplayer word race backend",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.on_event("startup")
async def on_startup() -> None:
    setup_logging(settings.LOG_LEVEL)

    app.state.engine = None
    if settings.DATABASE_URL:
        engine = create_engine(settings.DATABASE_URL)
        await init_db(engine)
        app.state.engine = engine
        app.state.game_repository = SqlGameRepository(create_session_factory(engine))
        logger.info("Using SQL storage")
    else:
        app.state.game_repository = MemoryGameRepository()
        logger.info("Using in-memory storage")

    app.state.word_source = WordSource.from_files(
        settings.ANSWER_WORDS_PATH,
        settings.VALID_WORDS_PATH,
    )
    app.state.room_locks = RoomLockManager()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    if app.state.engine is not None:
        await app.state.engine.dispose()


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    start = time.perf_counter()
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        if request.url.path.startswith(settings.API_PREFIX):
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s %d in %.0fms",
                request.method,
                request.url.path,
                status_code,
                duration_ms,
            )


@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> BaseResponse:
    return BaseResponse(
        message="healthy",
        data={"status": "ok", "uptime": round(time.monotonic() - STARTED_AT, 3)},
    )


@app.exception_handler(WordRaceDomainError)
async def wordrace_domain_error_handler(
    _request: Request,
    exc: WordRaceDomainError,
) -> JSONResponse:
    domain_error_code_mapper = {
        DomainErrorCode.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
        DomainErrorCode.INVALID_PLAYER_NAME: status.HTTP_400_BAD_REQUEST,
        DomainErrorCode.INVALID_GUESS_LENGTH: status.HTTP_400_BAD_REQUEST,
        DomainErrorCode.INVALID_WORD: status.HTTP_400_BAD_REQUEST,
        DomainErrorCode.ROOM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
        DomainErrorCode.ROOM_IS_FULL: status.HTTP_400_BAD_REQUEST,
        DomainErrorCode.ROOM_NOT_WAITING: status.HTTP_400_BAD_REQUEST,
        DomainErrorCode.ROOM_NOT_PLAYING: status.HTTP_400_BAD_REQUEST,
        DomainErrorCode.NO_PLAYERS: status.HTTP_400_BAD_REQUEST,
        DomainErrorCode.NAME_TAKEN: status.HTTP_400_BAD_REQUEST,
        DomainErrorCode.NOT_HOST: status.HTTP_403_FORBIDDEN,
        DomainErrorCode.PLAYER_NOT_IN_ROOM: status.HTTP_403_FORBIDDEN,
        DomainErrorCode.PLAYER_ALREADY_FINISHED: status.HTTP_400_BAD_REQUEST,
        DomainErrorCode.DUPLICATE_GUESS: status.HTTP_400_BAD_REQUEST,
    }
    status_code = domain_error_code_mapper.get(
        exc.code,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Domain error %s: %s", exc.code.value, exc.message)

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            {
                "detail": exc.message,
                "code": exc.code,
                "error_details": exc.details,
            }
        ),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    _request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(
            {
                "detail": "Invalid request",
                "code": DomainErrorCode.INVALID_REQUEST,
                "error_details": {"errors": exc.errors()},
            }
        ),
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "code": DomainErrorCode.INTERNAL_ERROR.value,
        },
    )
