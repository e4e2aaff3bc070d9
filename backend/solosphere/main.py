from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
import time
import uvicorn
from .config import settings
from .db import init_models, close_db
from .logger import logger
from .routes import auth as auth_routes
from .routes import bids as bid_routes
from .routes import jobs as job_routes
from .schemas import HealthResponse
from .exceptions import (
    SoloSphereBaseException,
    DuplicateBidError,
    solosphere_exception_handler,
    duplicate_bid_exception_handler,
    http_exception_handler,
    store_exception_handler,
    generic_exception_handler,
)

app = FastAPI(
    title="SoloSphere API",
    version="1.0.0",
    description="Job bidding marketplace: buyers post jobs, sellers place bids"
)

app.add_exception_handler(SoloSphereBaseException, solosphere_exception_handler)
app.add_exception_handler(DuplicateBidError, duplicate_bid_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(SQLAlchemyError, store_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    logger.info(
        f"Request: {request.method} {request.url.path}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
        }
    )

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"Response: {response.status_code}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
        }
    )

    return response

app.include_router(auth_routes.router)
app.include_router(job_routes.router)
app.include_router(bid_routes.router)

@app.on_event("startup")
async def startup():
    logger.info("Starting SoloSphere API")
    try:
        await init_models()
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

@app.on_event("shutdown")
async def shutdown():
    logger.info("Shutting down SoloSphere API")
    await close_db()

@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Hello from SoloSphere Server...."

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(status="ok", service=settings.SERVICE_NAME)

def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

if __name__ == "__main__":
    run()
