"""Random seeds, password hashing and form keys."""

import hashlib
import hmac
import secrets
import time
from typing import Optional


class Seeder:
    """Random seed and token generation."""

    def build_seed(self, length: int = 32) -> str:
        """Return ``length`` hex characters of randomness."""
        return secrets.token_hex((length + 1) // 2)[:length]

    def build_random_string(self, length: int = 16) -> str:
        return secrets.token_urlsafe(length)[:length]


class Hasher:
    """PBKDF2 password hashing in ``algorithm$iterations$salt$hash`` format."""

    algorithm = "sha256"

    def __init__(self, iterations: int = 100_000):
        self.iterations = iterations

    def hash(self, password: str, salt: Optional[str] = None) -> str:
        salt = salt or secrets.token_hex(16)
        digest = hashlib.pbkdf2_hmac(
            self.algorithm, password.encode("utf-8"), salt.encode("utf-8"), self.iterations
        ).hex()
        return f"{self.algorithm}${self.iterations}${salt}${digest}"

    def check(self, password: str, hashed: str) -> bool:
        try:
            algorithm, iterations, salt, digest = hashed.split("$")
            candidate = hashlib.pbkdf2_hmac(
                algorithm, password.encode("utf-8"), salt.encode("utf-8"), int(iterations)
            ).hex()
        except ValueError:
            return False
        return hmac.compare_digest(candidate, digest)


class FormKey:
    """Time-limited keys bound to a form name, to reject forged submissions."""

    def __init__(self, secret: Optional[str] = None, timeout: int = 3600):
        self.secret = secret or secrets.token_hex(32)
        self.timeout = timeout

    def _sign(self, form_name: str, issued: int) -> str:
        message = f"{form_name}:{issued}".encode("utf-8")
        return hmac.new(self.secret.encode("utf-8"), message, hashlib.sha256).hexdigest()

    def build(self, form_name: str) -> str:
        issued = int(time.time())
        return f"{issued}:{self._sign(form_name, issued)}"

    def check(self, form_name: str, key: str) -> bool:
        try:
            issued_str, signature = key.split(":", 1)
            issued = int(issued_str)
        except ValueError:
            return False
        if time.time() - issued > self.timeout:
            return False
        return hmac.compare_digest(signature, self._sign(form_name, issued))
