import hashlib
import secrets
from abc import ABC, abstractmethod


class TokenHasher(ABC):
    """Generates invitation tokens and their one-way digests"""

    @abstractmethod
    def generate(self) -> str:
        pass

    @abstractmethod
    def hash(self, token: str) -> str:
        """Deterministic, collision-resistant digest of a token"""
        pass


class Sha256TokenHasher(TokenHasher):
    """32 random bytes, hex-encoded (64 chars); SHA-256 hex digest for storage"""

    def __init__(self, nbytes: int = 32):
        self.nbytes = nbytes

    def generate(self) -> str:
        return secrets.token_hex(self.nbytes)

    def hash(self, token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
