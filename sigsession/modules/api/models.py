"""
Sigsession API data models.

These models define the JSON bodies accepted and returned by the HTTP
layer. Wire field names are camelCase; Python attributes are snake_case.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Error codes (API Output)

ERROR_MISSING_FIELDS = "missing fields"
ERROR_EXCEPTION = "exception"
ERROR_SIGNATURE_INVALID = "signature invalid"
ERROR_NOT_FOUND = "not_found"
ERROR_STORE = "store_error"


# Request Models (API Input)


class SignatureProof(BaseModel):
    """
    Signed message proving control of an address.

    Fields are optional at the schema level so that an incomplete body is
    reported as "missing fields" rather than a generic 422.
    """

    address: Optional[str] = Field(None, description="Claimed signer address (0x...)")
    message: Optional[str] = Field(None, description="Plain-text message that was signed")
    signature: Optional[str] = Field(None, description="Hex-encoded personal_sign signature")

    @property
    def is_complete(self) -> bool:
        """True when every field is present and non-empty."""
        return bool(self.address and self.message and self.signature)


# Response Models (API Output)


class OkResponse(BaseModel):
    """Bare acknowledgement."""

    ok: bool = True


class ErrorResponse(BaseModel):
    """Rejection returned for every failed request."""

    ok: bool = False
    error: str


class VerifyResponse(BaseModel):
    """Outcome of a signature check."""

    ok: bool


class StartProcessingResponse(BaseModel):
    """Session minted after a successful signature check."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    session_id: str = Field(..., alias="sessionId")
    start: int = Field(..., description="Creation time, ms since epoch")
    expiry: int = Field(..., description="Absolute expiry, ms since epoch")


class SessionResponse(BaseModel):
    """Live session with the store's remaining lifetime."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    address: str
    start: int
    expiry: int
    remaining_ms: int = Field(..., alias="remainingMs", ge=0)
