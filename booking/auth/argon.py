from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

# Argon2id with a random salt: hashing the same password twice gives two
# different digests, so a digest is computed once and stored.
default_hasher = PasswordHasher()


class PasswordService:
    """
    The only place that touches password material. Components depend on
    `hash` and `verify`; the algorithm stays behind this class.
    """

    def __init__(self, hasher: Optional[PasswordHasher] = None):
        self._hasher = hasher or default_hasher

    def hash(self, plain_password: str) -> str:
        return self._hasher.hash(plain_password)

    def verify(self, plain_password: Optional[str], hashed_password: Optional[str]) -> bool:
        if not plain_password or not hashed_password:
            return False
        try:
            return self._hasher.verify(hashed_password, plain_password)
        except VerifyMismatchError:
            return False
        except InvalidHashError:
            # un hash corrupte a disc no ha de permetre l'accés
            return False
        except VerificationError:
            return False
