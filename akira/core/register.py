import typing
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from akira.core import settings
from akira.api import api
from akira.logger import logger
from akira.services import Dispatcher, ResizeService, TransformExecutor, get_engine
from akira.services.validation import MISSING_SIZE
from akira.utils import OutputFormat, RequestError, ensure_unique_route_names, simplify_operation_ids

NOT_FOUND = "Route does not exist."


@asynccontextmanager
async def lifespan(app: FastAPI) -> typing.AsyncGenerator[None, None]:
    engine = get_engine(settings.IMAGE_ENGINE)
    executor = TransformExecutor(max_workers=settings.MAX_CONCURRENT_TRANSFORMS)
    executor.start()

    dispatcher = Dispatcher(
        engine,
        pool_size=settings.POOL_SIZE,
        output_format=OutputFormat(settings.OUTPUT_FORMAT),
        executor=executor,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
    )
    resize_service = ResizeService(
        dispatcher,
        default_quality=settings.DEFAULT_QUALITY,
        size_delimiter=settings.SIZE_DELIMITER,
        report_partial_failure=settings.REPORT_PARTIAL_FAILURE,
    )

    app.state.executor = executor
    app.state.dispatcher = dispatcher
    app.state.resize_service = resize_service

    logger.info(f"Akira started: engine={engine.name}, format={settings.OUTPUT_FORMAT}, "
                f"pool_size={settings.POOL_SIZE}, max_transforms={settings.MAX_CONCURRENT_TRANSFORMS}")

    yield

    executor.stop()
    logger.info("Oyasuminasai!")


def register_app():
    # FastAPI
    app = FastAPI(
        lifespan=lifespan,
        title=settings.TITLE,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        docs_url=settings.DOCS_URL,
        redoc_url=settings.REDOCS_URL,
        openapi_url=settings.OPENAPI_URL,
    )

    # Middlewares
    register_middleware(app)

    # Exception handlers
    register_exception_handlers(app)

    # Routers
    register_router(app)

    return app


def register_middleware(app: FastAPI):
    """
    Add Middewares, the execution order is from bottom to top

    :param app:
    :return:
    """

    if settings.MIDDLEWARE_ACCESS_LOG:
        @app.middleware("http")
        async def access_log(request: Request, call_next):
            client = f"{request.client.host}:{request.client.port}" if request.client else "-"
            logger.info(f"{request.method} {client} {request.url}")
            return await call_next(request)

    # CORS: Always at the end
    if settings.MIDDLEWARE_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=['*'],
            allow_credentials=True,
            allow_methods=['*'],
            allow_headers=['*'],
        )


def _envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "error": True})


def validation_message(errors: typing.Sequence[dict]) -> str:
    """Missing-size message when ``size`` is at fault, otherwise name the first bad field."""
    fields = [str(err.get("loc", ())[-1]) for err in errors if err.get("loc")]
    if "size" in fields:
        return MISSING_SIZE
    if fields:
        return f"Invalid value for field '{fields[0]}'."
    return "Invalid request."


def register_exception_handlers(app: FastAPI):
    """
    Render every error as ``{"message": ..., "error": true}``

    :param app:
    :return:
    """

    @app.exception_handler(RequestError)
    async def request_error_handler(request: Request, exc: RequestError):
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return _envelope(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning(f"{request.method} {request.url.path} -> 400: {errors}")
        return _envelope(status.HTTP_400_BAD_REQUEST, validation_message(errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _envelope(exc.status_code, NOT_FOUND)
        return _envelope(exc.status_code, str(exc.detail))


def register_router(app: FastAPI):
    """
    Routing

    :param app: FastAPI
    :return:
    """

    # API
    app.include_router(api)

    # Extra
    ensure_unique_route_names(app)
    simplify_operation_ids(app)
