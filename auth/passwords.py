"""
Password hashing with bcrypt.

Only the hash produced here is ever written to the credential store.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt work factor (higher = more secure but slower)
BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """
    One-way adaptive hash and constant-time verify.

    Usage:
        hasher = PasswordHasher()
        hashed = hasher.hash("hunter2")
        hasher.verify("hunter2", hashed)  # True
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt.

        Returns:
            Hashed password string (includes salt and cost)
        """
        if not password:
            raise ValueError("Password cannot be empty")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")

        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)

        return hashed.decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """
        Verify a password against a stored hash.

        Returns False for empty or over-long input, or a malformed hash.
        """
        if not password or not hashed:
            return False
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return False

        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Password verification error: {e}")
            return False
