"""
Identity Module - Black Box Interface

Purpose: Prove control of an address from a signed personal message
Interface: verify(), SignatureVerifier.verify()
Hidden: EIP-191 message encoding, secp256k1 public key recovery

Stateless and side-effect free. Can be replaced with any other proof scheme
(Solana ed25519, SIWE) without affecting the session module.
"""

from .interfaces import Verifier
from .verifier import SignatureVerifier, recover_address, verify

__all__ = ["SignatureVerifier", "Verifier", "recover_address", "verify"]
