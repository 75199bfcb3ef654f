"""
API Module - Request and response models for the HTTP layer.
"""

from .models import (
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

__all__ = [
    "ERROR_EXCEPTION",
    "ERROR_MISSING_FIELDS",
    "ERROR_NOT_FOUND",
    "ERROR_SIGNATURE_INVALID",
    "ERROR_STORE",
    "ErrorResponse",
    "OkResponse",
    "SessionResponse",
    "SignatureProof",
    "StartProcessingResponse",
    "VerifyResponse",
]
