"""Identity verification interfaces following Black Box Design principles."""
from typing import Protocol


class Verifier(Protocol):
    """Protocol for identity verifiers - allows swappable implementations."""

    def verify(self, address: str, message: str, signature: str) -> bool:
        """
        Check that signature over message was produced by address.

        Args:
            address: Claimed signer address
            message: Plain-text message that was signed
            signature: Hex-encoded signature

        Returns:
            True if the recovered signer is address, False otherwise

        Raises:
            VerificationError: If the signature cannot be parsed or recovered
        """
        ...
