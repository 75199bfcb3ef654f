#!/usr/bin/env python3
"""
Sigsession - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Opens the Redis connection and initializes modules
3. Exposes the HTTP API

All business logic is in the modules, following black box principles.
"""

import logging
import logging.config as log_config
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from sigsession import __version__
from sigsession.errors import StoreError, ValidationError, VerificationError
from sigsession.logging_config import get_logging_config
from sigsession.modules.api import (
    ERROR_EXCEPTION,
    ERROR_MISSING_FIELDS,
    ERROR_NOT_FOUND,
    ERROR_SIGNATURE_INVALID,
    ERROR_STORE,
    ErrorResponse,
    OkResponse,
    SessionResponse,
    SignatureProof,
    StartProcessingResponse,
    VerifyResponse,
)

# Import modules through their black box interfaces
from sigsession.modules.config import get_config
from sigsession.modules.identity import SignatureVerifier, Verifier
from sigsession.modules.session import SessionModule
from sigsession.modules.storage import StorageModule

# Get configuration
config = get_config()

# Configure logging with health check suppression
log_config.dictConfig(get_logging_config(config.get("log_level")))
logger = logging.getLogger(__name__)

# Module instances (session/storage initialized at startup)
storage: Optional[StorageModule] = None
session_module: Optional[SessionModule] = None
verifier: Verifier = SignatureVerifier()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - initialize and cleanup resources.
    """
    global storage, session_module

    logger.info("Starting Sigsession API...")

    storage = StorageModule.from_config(config)
    redis_client = await storage.connect()
    session_module = SessionModule(redis_client)

    logger.info("Sigsession API started successfully")

    yield

    logger.info("Shutting down Sigsession API...")
    session_module = None
    await storage.disconnect()
    logger.info("Sigsession API shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Sigsession API",
    description="Signature-authenticated sessions backed by Redis",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("cors_origins"),
    allow_methods=["*"],
    allow_headers=["*"],
)


# Dependency injection helpers
def get_session_module() -> SessionModule:
    """Return the session module or fail with 503 before startup."""
    if not session_module:
        raise HTTPException(503, "Service not initialized")
    return session_module


def get_verifier() -> Verifier:
    return verifier


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=error).model_dump())


def require_complete(proof: SignatureProof) -> None:
    if not proof.is_complete:
        raise ValidationError(ERROR_MISSING_FIELDS)


# Health Endpoints


@app.get("/")
async def root():
    """Liveness probe."""
    return {"ok": True}


@app.get("/health")
async def health_check():
    """
    Health check including Redis connectivity.

    Returns:
        200: Service healthy
        503: Redis unreachable or modules not initialized
    """
    redis_ok = bool(storage) and await storage.ping()
    modules_ready = session_module is not None

    if redis_ok and modules_ready:
        return {"status": "healthy", "redis": "connected", "version": __version__}

    return JSONResponse(
        status_code=503,
        content={
            "status": "unhealthy",
            "redis": "connected" if redis_ok else "disconnected",
            "modules": "initialized" if modules_ready else "not initialized",
        },
    )


# Identity Endpoints


@app.post("/verify-signature", response_model=VerifyResponse)
def verify_signature(proof: SignatureProof, signer: Verifier = Depends(get_verifier)):
    """
    Check a signed message against the claimed address.

    Plain def so key recovery runs in the threadpool, off the event loop.

    Returns:
        200: {"ok": bool}
        400: Missing fields
        500: Signature could not be parsed
    """
    require_complete(proof)
    return VerifyResponse(ok=signer.verify(proof.address, proof.message, proof.signature))


# Session Endpoints


@app.post("/start-processing", response_model=StartProcessingResponse)
async def start_processing(
    proof: SignatureProof,
    signer: Verifier = Depends(get_verifier),
    sessions: SessionModule = Depends(get_session_module),
):
    """
    Verify a signed message and open a 24 hour session for its signer.

    Returns:
        200: Session created
        400: Missing fields
        403: Signature does not belong to address
        500: Signature could not be parsed
        503: Redis unavailable
    """
    require_complete(proof)

    # Key recovery is CPU bound; keep it off the event loop
    verified = await run_in_threadpool(
        signer.verify, proof.address, proof.message, proof.signature
    )
    if not verified:
        logger.warning(f"Rejected session request for {proof.address}: signature mismatch")
        return error_response(403, ERROR_SIGNATURE_INVALID)

    record = await sessions.create_session(proof.address)
    return StartProcessingResponse(
        session_id=record.session_id, start=record.start, expiry=record.expiry
    )


@app.get("/session/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, sessions: SessionModule = Depends(get_session_module)):
    """
    Get a session and its remaining lifetime as reported by Redis.

    Returns:
        200: Session details, or {"ok": false, "error": "not_found"}
        503: Redis unavailable
    """
    session = await sessions.get_session(session_id)
    if session is None:
        return error_response(200, ERROR_NOT_FOUND)

    return SessionResponse(
        address=session.address,
        start=session.start,
        expiry=session.expiry,
        remaining_ms=session.remaining_ms,
    )


@app.delete("/session/{session_id}", response_model=OkResponse)
async def end_session(session_id: str, sessions: SessionModule = Depends(get_session_module)):
    """
    Delete a session. Succeeds whether or not the session exists.

    Returns:
        200: {"ok": true}
        503: Redis unavailable
    """
    await sessions.end_session(session_id)
    return OkResponse()


# Error handlers


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render framework errors (503 before startup, 404, 405) in the API error shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Handle missing or malformed caller input."""
    return error_response(400, str(exc) or ERROR_MISSING_FIELDS)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Bodies that are not JSON objects of strings count as missing fields."""
    logger.debug(f"Request body rejected on {request.url.path}: {exc.errors()}")
    return error_response(400, ERROR_MISSING_FIELDS)


@app.exception_handler(VerificationError)
async def verification_error_handler(request: Request, exc: VerificationError):
    """Handle signatures that cannot be recovered."""
    logger.error(f"Signature verification failed on {request.url.path}: {exc}")
    return error_response(500, ERROR_EXCEPTION)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    """Handle Redis failures."""
    logger.error(f"Store error on {request.url.path}: {exc}")
    return error_response(503, ERROR_STORE)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Report anything else as a generic failure."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return error_response(500, ERROR_EXCEPTION)


def run() -> None:
    """Run the API server with uvicorn."""
    uvicorn.run(
        "sigsession.main:app",
        host=config.get("host"),
        port=config.get("port"),
        log_level=config.get("log_level").lower(),
        reload=config.get("debug"),
        log_config=get_logging_config(config.get("log_level")),
    )


if __name__ == "__main__":
    run()
