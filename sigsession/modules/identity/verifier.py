"""
Signature verification for Sigsession.

Signatures follow the personal-message scheme used by wallets
(EIP-191 version 0x45, "\\x19Ethereum Signed Message:\\n" + length + message)
over secp256k1. Recovery is delegated to eth-account.
"""

import logging

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_keys.exceptions import BadSignature
from eth_utils import ValidationError as EthValidationError

from ...errors import VerificationError

logger = logging.getLogger(__name__)

# Raised by eth-account/eth-keys/hexbytes for signatures that are not
# recoverable at all (bad hex, wrong length, invalid v, invalid r/s)
_UNRECOVERABLE = (BadSignature, EthValidationError, ValueError, TypeError, IndexError)


def recover_address(message: str, signature: str) -> str:
    """
    Recover the checksummed address that signed message.

    Raises:
        VerificationError: If signature cannot be parsed or recovered
    """
    try:
        return Account.recover_message(encode_defunct(text=message), signature=signature)
    except _UNRECOVERABLE as e:
        raise VerificationError(f"Unrecoverable signature: {e}") from e


def verify(address: str, message: str, signature: str) -> bool:
    """
    Verify that signature over message was produced by address.

    Address comparison is case-insensitive, so checksummed and lower-cased
    forms of the same address are equivalent.

    Args:
        address: Claimed signer address
        message: Plain-text message that was signed
        signature: Hex-encoded 65 byte signature

    Returns:
        True if the recovered signer is address, False otherwise

    Raises:
        VerificationError: If signature cannot be parsed or recovered
    """
    recovered = recover_address(message, signature)
    ok = recovered.lower() == address.lower()
    if not ok:
        logger.debug(f"Signature recovered {recovered}, claimed {address}")
    return ok


class SignatureVerifier:
    """Injectable wrapper around verify() for the HTTP layer."""

    def verify(self, address: str, message: str, signature: str) -> bool:
        return verify(address, message, signature)
