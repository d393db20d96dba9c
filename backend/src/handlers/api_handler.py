"""Main FastAPI application handler for the workshop feedback API."""

import asyncio
import logging
import os
import sys
import threading
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Body, Depends, FastAPI, Request, Response, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException

from models.feedback import ErrorResponse, FeedbackResponse
from services.email_service import EmailService
from services.feedback_service import FeedbackService
from utils.constants import API_VERSION, SUCCESS_MESSAGE
from utils.errors import AppError, NotFoundError, ValidationError, error_response_body
from utils.logging_config import configure_logging
from utils.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

FEEDBACK_PATH = "/send-feedback"
SLOW_REQUEST_MS = 1000


# MARK: - Dependencies


def get_feedback_service(request: Request) -> FeedbackService:
    """Return the FeedbackService created with the application."""
    return request.app.state.feedback_service


def build_feedback_table(settings: Settings):
    """Create the DynamoDB table handle for feedback submissions."""
    dynamodb = boto3.resource(
        "dynamodb",
        region_name=settings.aws_default_region,
        endpoint_url=settings.dynamodb_endpoint_url,
    )
    return dynamodb.Table(settings.feedback_table)


# MARK: - Health & Static Convenience


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "version": API_VERSION,
    }


@router.get("/favicon.ico", include_in_schema=False)
async def favicon():
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# MARK: - Feedback Endpoint


@router.post(
    FEEDBACK_PATH,
    response_model=FeedbackResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def send_feedback(
    payload: Annotated[Any, Body()] = None,
    service: FeedbackService = Depends(get_feedback_service),  # noqa: B008
):
    """Save a feedback submission and email it to the company mailbox.

    Runs synchronously in the worker thread pool since both the DynamoDB
    write and the SMTP delivery block.
    """
    feedback = service.submit(payload)
    logger.info("Feedback %s processed", feedback.feedback_id)
    return FeedbackResponse(success=True, message=SUCCESS_MESSAGE)


# MARK: - Error Handlers


def _original_url(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


def _error_response(request: Request, exc: BaseException) -> JSONResponse:
    include_stack = request.app.state.settings.is_development
    status_code, body = error_response_body(exc, include_stack=include_stack)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(**body).model_dump(exclude_none=True),
    )


async def app_error_handler(request: Request, exc: Exception):
    """Shape pipeline errors into the uniform error body."""
    return _error_response(request, exc)


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Turn unmatched routes and missing assets into NotFoundError."""
    if exc.status_code in (
        status.HTTP_404_NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED,
    ):
        return _error_response(request, NotFoundError.for_path(_original_url(request)))
    return await http_exception_handler(request, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Handle request bodies that are not valid JSON."""
    logger.info("Malformed request body on %s: %s", request.url.path, exc.errors())
    return _error_response(request, ValidationError("Malformed request body"))


async def unexpected_error_handler(request: Request, exc: Exception):
    """Handle anything that escaped the pipeline."""
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return _error_response(request, exc)


# MARK: - Request Logging


def request_log_level(path: str, status_code: int, duration_ms: float) -> int | None:
    """Pick the log level for a finished request, or None to skip it.

    Feedback submissions are always logged; other requests only when they
    fail or are slow.
    """
    if status_code >= 500:
        return logging.ERROR
    if duration_ms > SLOW_REQUEST_MS:
        return logging.WARNING
    if status_code >= 400 or path == FEEDBACK_PATH:
        return logging.INFO
    return None


def describe_outcome(path: str, status_code: int) -> str:
    if path == FEEDBACK_PATH:
        if status_code < 400:
            return "sent"
        if status_code < 500:
            return "rejected"
        return "failed"
    if status_code < 400:
        return "ok"
    if status_code < 500:
        return "client error"
    return "server error"


# MARK: - Process Lifecycle


def _terminate(message: str, exc: BaseException | None) -> None:
    logger.critical(message, exc_info=exc)
    for handler in logging.getLogger().handlers:
        handler.flush()
    os._exit(1)


def handle_loop_exception(loop, context: dict) -> None:
    """Event loop exception handler: unhandled task errors are fatal."""
    _terminate(
        f"Unhandled asyncio error: {context.get('message')}", context.get("exception")
    )


def handle_thread_exception(args) -> None:
    """threading.excepthook: uncaught errors in worker threads are fatal."""
    if args.exc_type is SystemExit:
        return
    _terminate(
        f"Uncaught exception in thread {getattr(args.thread, 'name', '?')}",
        args.exc_value,
    )


def handle_uncaught_exception(exc_type, exc_value, exc_traceback) -> None:
    """sys.excepthook: log uncaught errors before the process exits."""
    logger.critical(
        "Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback)
    )


def install_fatal_handlers() -> None:
    sys.excepthook = handle_uncaught_exception
    threading.excepthook = handle_thread_exception


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Verify the store before serving requests and check the mail relay.

    A store failure aborts startup. The mail relay check runs in a
    background thread and its outcome is only logged, so a hung relay
    never holds up startup.
    """
    if app.state.exit_on_fatal:
        asyncio.get_running_loop().set_exception_handler(handle_loop_exception)

    service: FeedbackService = app.state.feedback_service
    try:
        service.check_store()
    except (ClientError, BotoCoreError) as e:
        logger.critical("DynamoDB connection error: %s", e)
        raise

    mail_check = threading.Thread(
        target=service.email_service.verify, name="smtp-verify", daemon=True
    )
    mail_check.start()
    app.state.mail_check = mail_check
    yield


# MARK: - Application Factory


def create_app(
    settings: Settings | None = None,
    *,
    feedback_table=None,
    email_service: EmailService | None = None,
    exit_on_fatal: bool = False,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration, defaults to get_settings()
        feedback_table: DynamoDB table, created from settings if omitted
        email_service: Mail sender, created from settings if omitted
        exit_on_fatal: Terminate the process on unhandled event loop errors

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Workshop Feedback API",
        description="Collects customer feedback and forwards it to the workshop",
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.exit_on_fatal = exit_on_fatal
    app.state.feedback_service = FeedbackService(
        table=feedback_table if feedback_table is not None else build_feedback_table(settings),
        email_service=email_service or EmailService.from_settings(settings),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        """Log every feedback submission, plus slow or failed requests."""
        start = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000

        level = request_log_level(request.url.path, response.status_code, duration_ms)
        if level is not None:
            logger.log(
                level,
                "%s %s -> %d (%s) in %.0fms",
                request.method,
                request.url.path,
                response.status_code,
                describe_outcome(request.url.path, response.status_code),
                duration_ms,
            )
        return response

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(router)

    # Public assets are served for anything the API routes do not match
    if settings.static_dir.is_dir():
        app.mount(
            "/",
            StaticFiles(directory=settings.static_dir, html=True),
            name="static",
        )
    else:
        logger.info("Static directory %s not found, not serving assets", settings.static_dir)

    return app


app = create_app()

# MARK: - Lambda Handler

api_handler = Mangum(app, lifespan="off")


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    install_fatal_handlers()

    uvicorn.run(
        create_app(settings, exit_on_fatal=True),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


# For local development
if __name__ == "__main__":
    main()
