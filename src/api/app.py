from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Error
from src.adapter.services.auth_provider import JwtAuthProvider
from src.adapter.services.email_sender import LoggingEmailSender, SmtpEmailSender
from src.app.errors import OperationError, ValidationError, status_code_for
from src.domain import entities  # noqa: F401  (registers table models)
from .envelope import error_body
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.base_error))


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(exc.base_error, message="Internal server error"),
    )


async def handle_operation_error(request: Request, exc: OperationError):
    code = status_code_for(exc.error)
    if code >= 500:
        logger.error(f"Operation failed: {exc.error.code}")
        return JSONResponse(
            status_code=code, content=error_body(exc.error, message="Internal server error")
        )
    logger.warning(f"Operation rejected: {exc.error.code} {exc.error.message}")
    return JSONResponse(status_code=code, content=error_body(exc.error))


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    error = ValidationError("INVALID_REQUEST", details or "Invalid request")
    logger.warning(f"Client error: {error.code} {error.message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(error))


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    error = Error("INTERNAL_ERROR", "Internal server error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body(error)
    )


def build_email_sender(ApplicationConfig):
    if ApplicationConfig.SMTP_HOST:
        return SmtpEmailSender(
            host=ApplicationConfig.SMTP_HOST,
            port=ApplicationConfig.SMTP_PORT,
            from_email=ApplicationConfig.EMAIL_FROM,
            username=ApplicationConfig.SMTP_USERNAME or None,
            password=ApplicationConfig.SMTP_PASSWORD or None,
            use_tls=ApplicationConfig.SMTP_USE_TLS,
        )
    return LoggingEmailSender()


def create_app(
    ApplicationConfig,
    session_factory=None,
    auth_provider=None,
    email_sender=None,
) -> FastAPI:
    engine = None
    if session_factory is None:
        engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
        session_factory = sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None and ApplicationConfig.CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield
        if engine is not None:
            await engine.dispose()

    app = FastAPI(title="Tenant Lifecycle API", version="0.1.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.session_factory = session_factory
    app.state.auth_provider = auth_provider or JwtAuthProvider(
        session_factory,
        jwt_secret=ApplicationConfig.JWT_SECRET,
        session_ttl=timedelta(days=ApplicationConfig.SESSION_TTL_DAYS),
    )
    app.state.email_sender = email_sender or build_email_sender(ApplicationConfig)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import (
        admin,
        audit,
        auth,
        health_check,
        invitation,
        platform_setup,
        tenant,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(platform_setup.router, tags=["Setup"])
    app.include_router(tenant.router, tags=["Tenant"])
    app.include_router(invitation.router, tags=["Invitations"])
    app.include_router(audit.router, tags=["Audit"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(OperationError, handle_operation_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
