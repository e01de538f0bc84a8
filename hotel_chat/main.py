from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Optional
import logging

from firebase_admin import firestore

from hotel_chat.api.v1.endpoints import check_in
from hotel_chat.api.v1.endpoints import notifications
from hotel_chat.core.config import settings
from hotel_chat.core.firebase import create_firestore_client
from hotel_chat.services.email_service import EmailService
from hotel_chat.services.notification_service import PushNotificationService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

HEALTH_BANNER = "Hotel Chat Server is running!"


def create_app(
    db: Optional[firestore.AsyncClient] = None,
    email_service: Optional[EmailService] = None,
    push_service: Optional[PushNotificationService] = None,
) -> FastAPI:
    """
    Builds the application. Collaborators passed in are used as-is;
    the rest are created once at start-up.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.email_service = email_service or EmailService.from_settings(settings)
        app.state.push_service = push_service or PushNotificationService()
        if db is not None:
            app.state.db = db
        else:
            # Requests touching the store answer 500 while this is None
            app.state.db = create_firestore_client(settings)
        logger.info(f"Hotel Chat Server started, listening on port {settings.PORT}")
        yield

    app = FastAPI(
        title="Hotel Chat Server",
        description="Check-in emails and push notifications for the hotel guest chat.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected request body on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.get("/", response_class=PlainTextResponse)
    async def read_root():
        return HEALTH_BANNER

    app.include_router(check_in.router, tags=["check-in"])
    app.include_router(notifications.router, tags=["notifications"])
    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()

# To run this application (from the project root directory):
# uvicorn hotel_chat.main:app --reload
