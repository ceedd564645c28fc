import logging
import sys
from datetime import datetime

from bson import ObjectId
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional

from config import ConfigurationError, Settings
from database import LESSONS, ORDERS, Database, get_database
from logging_utils import configure_logging
from schemas import Lesson, LessonSpacesUpdate, Order, OrderRequest

logger = logging.getLogger(__name__)

# Utils

def serialize(value):
    """Make a MongoDB document JSON friendly without renaming or dropping fields."""
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize(v) for v in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def message(status_code: int, text: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": text})


class ImageFiles(StaticFiles):
    """Static images that answer a JSON 404 instead of the default error page."""

    async def get_response(self, path, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code in (404, 405):
                return JSONResponse(status_code=404, content={"error": "Image not found"})
            raise


def create_app(settings: Settings, database: Database) -> FastAPI:
    app = FastAPI(title="Lessons Booking API")
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["Content-Type"],
    )

    # Registered last so it wraps CORS and sees every request, preflights included
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        logger.info("%s %s", request.method, url)
        return await call_next(request)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(_request: Request, exc: RequestValidationError):
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            return message(400, "Invalid JSON body")
        return message(400, "Invalid request body")

    settings.images_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/images", ImageFiles(directory=settings.images_dir), name="images")

    @app.get("/")
    def read_root():
        return {"message": "Lessons API is running"}

    # Schemas endpoint for the viewer
    @app.get("/schema")
    def get_schema():
        return {
            "lesson": Lesson.model_json_schema(),
            "order": Order.model_json_schema(),
        }

    @app.get("/api/lessons")
    def list_lessons(db: Database = Depends(get_database)):
        try:
            docs = db.get_documents(LESSONS)
        except Exception:
            logger.exception("Error loading lessons")
            return message(500, "Failed to load lessons")
        return [serialize(d) for d in docs]

    @app.post("/api/order")
    def create_order(payload: Optional[OrderRequest] = None, db: Database = Depends(get_database)):
        payload = payload or OrderRequest()
        try:
            db.create_document(ORDERS, {
                "name": payload.name,
                "phone": payload.phone,
                "items": payload.items,
                "total": payload.total,
            })
        except Exception:
            logger.exception("Error saving order")
            return message(500, "Failed to save order")
        return {"message": "Order saved"}

    @app.put("/api/lessons")
    def update_lesson(payload: Optional[LessonSpacesUpdate] = None, db: Database = Depends(get_database)):
        payload = payload or LessonSpacesUpdate()
        if not payload.is_valid():
            return message(400, "subject, location, and numeric spaces are required")

        try:
            matched = db.update_lesson_spaces(payload.subject, payload.location, payload.spaces)
        except Exception:
            logger.exception("Error updating lesson")
            return message(500, "Failed to update lesson")

        if matched == 0:
            return message(404, "Lesson not found")
        return {"message": "Lesson updated"}

    return app


def run():
    import uvicorn

    load_dotenv()
    configure_logging()

    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(1)
    logging.getLogger().setLevel(settings.log_level)

    try:
        database = Database.connect(settings.mongo_uri, settings.db_name)
    except Exception:
        logger.exception("Failed to connect to MongoDB")
        sys.exit(1)

    app = create_app(settings, database)
    logger.info("Backend running on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
