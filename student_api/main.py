import logging
import sys
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .application.ports.notification_sender import NotificationSender
from .application.ports.student_repo import StudentRepository
from .application.services.otp_registry import OTPRegistry
from .application.services.token_issuer import TokenIssuer
from .config import Settings, check_startup, get_settings
from .database import build_engine, create_db_and_tables
from .exceptions import (
    APIException,
    ConfigurationError,
    api_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)
from .infrastructure.persistence.supabase.student_repository_rest import SupabaseStudentRepository
from .infrastructure.sms.twilio_sender import TwilioNotificationSender
from .middleware import LoggingMiddleware
from .routers import auth_router, students_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
    )


def create_app(
    settings: Optional[Settings] = None,
    *,
    notification_sender: Optional[NotificationSender] = None,
    student_repository: Optional[StudentRepository] = None,
    otp_registry: Optional[OTPRegistry] = None,
) -> FastAPI:
    """Build the application with its collaborators.

    Vendor clients are created from ``settings`` unless passed in. Raises
    ConfigurationError when required settings are missing.
    """
    settings = settings or get_settings()
    problems = check_startup(settings)
    if problems:
        raise ConfigurationError(problems)

    engine = None
    if student_repository is None:
        if settings.store_backend == "supabase":
            student_repository = SupabaseStudentRepository(
                base_url=settings.SUPABASE_URL,
                api_key=settings.SUPABASE_KEY,
                table=settings.SUPABASE_TABLE,
                timeout=settings.HTTP_TIMEOUT_SECONDS,
            )
        else:
            engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    if notification_sender is None:
        notification_sender = TwilioNotificationSender(
            account_sid=settings.TWILIO_ACCOUNT_SID,
            auth_token=settings.TWILIO_AUTH_TOKEN,
            from_number=settings.TWILIO_PHONE_NUMBER,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME} (store backend: {settings.store_backend})")
        if app.state.engine is not None:
            create_db_and_tables(app.state.engine)
        yield
        logger.info(f"Shutting down {settings.APP_NAME}...")
        if isinstance(app.state.student_repository, SupabaseStudentRepository):
            app.state.student_repository.close()
        if app.state.engine is not None:
            app.state.engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.otp_registry = otp_registry if otp_registry is not None else OTPRegistry()
    app.state.token_issuer = TokenIssuer(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS),
    )
    app.state.notification_sender = notification_sender
    app.state.student_repository = student_repository
    app.state.engine = engine

    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {"message": "Backend is running!"}

    @app.get("/health")
    def health_check():
        return {
            "status": "healthy",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "store_backend": settings.store_backend,
        }

    app.include_router(auth_router.router)
    app.include_router(students_router.router)

    return app


def main() -> None:
    # Load environment variables as early as possible
    load_dotenv()
    settings = get_settings()
    configure_logging(settings)

    problems = check_startup(settings)
    if problems:
        for problem in problems:
            logger.critical(f"ERROR: {problem}")
        sys.exit(1)

    import uvicorn
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
