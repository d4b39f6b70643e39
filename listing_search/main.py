# listing_search/main.py
import uuid
from fastapi import FastAPI, Request
from sqlalchemy.exc import SQLAlchemyError
from .db import Base, engine
from . import models  # noqa: F401 ensure models are imported so tables are known
from .api.routes import router as api_router
from .utils import logger

# create FastAPI instance
app = FastAPI(title="listing-search")
app.include_router(api_router)


@app.middleware("http")
async def request_headers(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    response = await call_next(request)
    response.headers["x-request-id"] = request_id
    # search results depend on live listing state
    response.headers["Cache-Control"] = "no-store"
    return response


@app.on_event("startup")
def on_startup_create_tables():
    # Ensure database tables are created on startup
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        # migrations may own the schema; keep serving
        logger.error("create_all failed: %s", e)
