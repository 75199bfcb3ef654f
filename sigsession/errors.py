"""
Error taxonomy shared by all Sigsession modules.

A missing session is not an error: SessionModule.get_session() returns
None for it.
"""


class SigsessionError(Exception):
    """Base class for all Sigsession errors."""


class ValidationError(SigsessionError):
    """Caller input is missing or malformed."""


class VerificationError(SigsessionError):
    """Signature cannot be parsed or its signer cannot be recovered.

    Distinct from a well-formed signature that belongs to another address,
    which verify() reports as False.
    """


class StoreError(SigsessionError):
    """Backend store is unreachable, failed an operation, or holds a corrupt record."""
