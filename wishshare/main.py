import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from wishshare.config import settings
from wishshare.dependencies import DbSession
from wishshare.errors import ApiError, ErrorCode, internal_error
from wishshare.logging_config import configure_logging
from wishshare.routers import auth, collaborators, items, wishlists

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
        headers=exc.headers,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "error": {
                "code": ErrorCode.VALIDATION_ERROR.value,
                "message": "Request validation failed",
                "details": jsonable_encoder(
                    [
                        {"path": list(err["loc"]), "message": err["msg"]}
                        for err in exc.errors()
                    ]
                ),
            }
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = internal_error()
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response().model_dump(mode="json"),
    )


def create_app() -> FastAPI:
    configure_logging()

    application = FastAPI(title="Wishshare API")

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(ApiError, api_error_handler)
    application.add_exception_handler(RequestValidationError, validation_error_handler)
    application.add_exception_handler(Exception, unhandled_error_handler)

    application.include_router(auth.router)
    application.include_router(wishlists.router)
    application.include_router(items.router)
    application.include_router(collaborators.router)

    @application.get("/health")
    def health(db: DbSession):
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database health check failed")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy"},
            )
        return {"status": "healthy"}

    return application


app = create_app()
