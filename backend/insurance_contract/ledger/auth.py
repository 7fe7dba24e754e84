"""
Capability verification for contract calls.

A verifier answers one question: did ``principal`` authorize ``operation``?
The contract asks before it mutates anything.
"""
import hashlib
import hmac
from typing import Optional, Protocol


class AuthVerifier(Protocol):
    def verify(self, principal: str, operation: str) -> bool:
        ...


class AllowAllVerifier:
    def verify(self, principal: str, operation: str) -> bool:
        return True


class DenyAllVerifier:
    def verify(self, principal: str, operation: str) -> bool:
        return False


def sign_proof(secret: str, principal: str, operation: str) -> str:
    message = f"{principal}:{operation}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class HmacProofVerifier:
    """Checks a single HMAC-SHA256 proof presented with the request."""

    def __init__(self, secret: str, proof: Optional[str]):
        self.secret = secret
        self.proof = proof

    def verify(self, principal: str, operation: str) -> bool:
        if not self.proof:
            return False
        expected = sign_proof(self.secret, principal, operation)
        return hmac.compare_digest(expected, self.proof)
