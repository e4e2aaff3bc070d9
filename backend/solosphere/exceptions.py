from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
import traceback
from .logger import logger


class InvalidTokenError(Exception):
    """Raised by the token service for any bad, malformed or expired token"""


class SoloSphereBaseException(Exception):
    """Base exception for the marketplace API"""
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(self.message)


class UnauthenticatedError(SoloSphereBaseException):
    """Raised when the session cookie is missing or does not verify"""
    def __init__(self, message: str = "unauthorized access"):
        super().__init__(message, "UNAUTHENTICATED", 401)


class ForbiddenError(SoloSphereBaseException):
    """Raised when a verified identity does not own the requested resource"""
    def __init__(self, message: str = "forbidden access"):
        super().__init__(message, "FORBIDDEN", 403)


class DuplicateBidError(SoloSphereBaseException):
    """Raised when a seller bids twice on the same job"""
    def __init__(self, message: str = "You have already placed a bid on this job."):
        super().__init__(message, "DUPLICATE_BID", 400)


class JobNotFoundError(SoloSphereBaseException):
    """Raised when job is not found"""
    def __init__(self, job_id: str):
        super().__init__(f"Job {job_id} not found", "JOB_NOT_FOUND", 404)


class BidNotFoundError(SoloSphereBaseException):
    """Raised when bid is not found"""
    def __init__(self, bid_id: str):
        super().__init__(f"Bid {bid_id} not found", "BID_NOT_FOUND", 404)


class InvalidListingQueryError(SoloSphereBaseException):
    """Raised when paging or sorting parameters are unusable"""
    def __init__(self, message: str):
        super().__init__(message, "INVALID_LISTING_QUERY", 400)


async def solosphere_exception_handler(request: Request, exc: SoloSphereBaseException):
    """Handle custom application exceptions"""
    logger.error(
        f"Application exception: {exc.code} - {exc.message}",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "request_path": request.url.path,
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.code,
            "message": exc.message,
            "status_code": exc.status_code,
        }
    )


async def duplicate_bid_exception_handler(request: Request, exc: DuplicateBidError):
    """Duplicate bids are answered with a plain-text body the client shows as-is"""
    logger.warning(
        f"Duplicate bid rejected: {exc.message}",
        extra={"error_code": exc.code, "request_path": request.url.path},
    )
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions"""
    logger.warning(
        f"HTTP {exc.status_code}: {exc.detail}",
        extra={
            "http_status_code": exc.status_code,
            "http_detail": exc.detail,
            "request_path": request.url.path,
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "HTTP_ERROR",
            "message": exc.detail,
            "status_code": exc.status_code,
        }
    )


async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle document store failures"""
    logger.error(
        f"Store failure: {type(exc).__name__} - {str(exc)}",
        extra={
            "exc_type": type(exc).__name__,
            "request_path": request.url.path,
            "exc_traceback": traceback.format_exc(),
        }
    )
    return JSONResponse(
        status_code=503,
        content={
            "error": "STORE_ERROR",
            "message": "The data store is unavailable. Please try again later.",
            "status_code": 503,
        }
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    logger.error(
        f"Unhandled exception: {type(exc).__name__} - {str(exc)}",
        extra={
            "exc_type": type(exc).__name__,
            "exc_message": str(exc),
            "request_path": request.url.path,
            "exc_traceback": traceback.format_exc(),
        }
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_SERVER_ERROR",
            "message": "An internal error occurred. Please try again later.",
        }
    )
