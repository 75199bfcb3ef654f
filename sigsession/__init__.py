"""
Sigsession - Signature-authenticated session service

Proves control of an Ethereum-style address with a signed message and
issues a 24 hour session stored in Redis.

Architecture:
- Each module is self-contained with a clear interface
- Modules receive their collaborators (Redis client, clock) by injection
- The HTTP layer in main.py only wires modules together

Modules:
- identity: Signature recovery and address comparison
- session: Session lifecycle against a TTL-capable store
- storage: Redis connection lifecycle
- config: Environment configuration
- api: Request/response models
"""

__version__ = "1.0.0"
