# =============================================================================
# Password Hashing
# =============================================================================
#
# Digests are stored as "salt:hash" where hash is PBKDF2-SHA256 over the
# password with a fresh random salt, so hashing the same password twice
# never yields the same digest. Comparison goes through verify() only.
#
# =============================================================================

import hashlib
import secrets

DEFAULT_ITERATIONS = 100_000


class PasswordHasher:
    """Hashes and verifies user passwords."""

    def __init__(self, iterations: int = DEFAULT_ITERATIONS):
        self.iterations = iterations

    def _digest(self, password: str, salt: str) -> str:
        hash_bytes = hashlib.pbkdf2_hmac(
            'sha256',
            password.encode('utf-8'),
            salt.encode('utf-8'),
            iterations=self.iterations,
        )
        return hash_bytes.hex()

    def hash(self, password: str) -> str:
        """
        Hash a password.

        Returns: salt:hash format string
        """
        salt = secrets.token_hex(32)
        return f"{salt}:{self._digest(password, salt)}"

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash. Never raises on mismatch."""
        try:
            salt, stored_hash = password_hash.split(':')
            if not salt or not stored_hash:
                return False
            return secrets.compare_digest(self._digest(password, salt), stored_hash)
        except (ValueError, AttributeError, TypeError, UnicodeEncodeError):
            return False
