# coursecart/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from coursecart.config import settings
from coursecart.database import Base, engine
from coursecart.models import user, session, section, cart, enrollment  # noqa: F401  (register tables)
from coursecart.routers import auth, sessions, cart as cart_router, enrollments, catalog

import time
import logging
from fastapi import Request
from coursecart.logging_config import setup_logging


setup_logging()
http_logger = logging.getLogger("coursecart.http")


# create tables if missing
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Course Registration Cart", version="1.0.0")


@app.middleware("http")
async def time_requests(request: Request, call_next):
    started = time.perf_counter()
    route = f"{request.method} {request.url.path}"
    try:
        response = await call_next(request)
    except Exception:
        http_logger.exception("%s crashed after %.1fms", route, (time.perf_counter() - started) * 1000)
        raise

    elapsed = (time.perf_counter() - started) * 1000
    response.headers["X-Process-Time-Ms"] = f"{elapsed:.1f}"
    level = logging.WARNING if response.status_code >= 500 else logging.INFO
    http_logger.log(level, "%s -> %s (%.1fms)", route, response.status_code, elapsed)
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth.router)
app.include_router(sessions.router)
app.include_router(cart_router.router)
app.include_router(enrollments.router)
app.include_router(catalog.router)

@app.get("/")
def root():
    return {"message": "Course registration backend is running!"}
