import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from booksphere_auth.adapter.email import build_email_delivery
from booksphere_auth.app.services.email_delivery import EmailConfig, EmailDelivery
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"success": False, **error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "code": exc.base_error.code, "message": "Server error"},
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    logger.warning(f"Request validation failed on {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "code": "VALIDATION_ERROR", "message": message},
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "code": "SERVER_ERROR", "message": "Server error"},
    )


def create_app(ApplicationConfig, email_delivery: EmailDelivery = None, init_db=None) -> FastAPI:
    if email_delivery is None:
        email_delivery = build_email_delivery(EmailConfig.from_application_config(ApplicationConfig))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_db is not None:
            await init_db()
        yield

    app = FastAPI(title="BookSphere Auth API", version="0.1.0", lifespan=lifespan)
    app.state.config = ApplicationConfig
    app.state.email_delivery = email_delivery

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from booksphere_auth.api.routes import auth, dev_inbox, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX, tags=["Authentication"])

    if not ApplicationConfig.is_production() and email_delivery.is_test_inbox:
        app.include_router(dev_inbox.router, prefix=ApplicationConfig.API_PREFIX, tags=["Development"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
