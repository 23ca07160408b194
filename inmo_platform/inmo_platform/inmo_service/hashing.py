from passlib.context import CryptContext
import logging

from .config import Settings
from .errors import InvalidInput

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Salted one-way password hashing with a fixed work factor.

    Args:
        scheme: passlib scheme name, e.g. ``pbkdf2_sha256`` or ``bcrypt``
        rounds: work factor handed to the scheme
        min_length: shortest accepted plaintext, in characters
        max_bytes: longest accepted plaintext, in UTF-8 bytes
    """

    def __init__(self, scheme: str = "pbkdf2_sha256", rounds: int = 29000,
                 min_length: int = 8, max_bytes: int = 72):
        self.min_length = min_length
        self.max_bytes = max_bytes
        self._context = CryptContext(
            schemes=[scheme],
            deprecated="auto",
            **{f"{scheme}__default_rounds": rounds}
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(
            scheme=settings.PASSWORD_HASH_SCHEME,
            rounds=settings.PASSWORD_HASH_ROUNDS,
            min_length=settings.PASSWORD_MIN_LENGTH,
            max_bytes=settings.PASSWORD_MAX_BYTES,
        )

    def hash(self, plaintext: str) -> str:
        if not plaintext:
            raise InvalidInput("password cannot be empty")
        if len(plaintext) < self.min_length:
            raise InvalidInput(f"password must be at least {self.min_length} characters")
        if len(plaintext.encode("utf-8")) > self.max_bytes:
            raise InvalidInput(f"password must be at most {self.max_bytes} bytes")
        return self._context.hash(plaintext)

    def verify(self, digest: str, plaintext: str) -> bool:
        """True iff ``digest`` was produced by ``hash`` for ``plaintext``."""
        if not digest or not plaintext:
            return False
        try:
            return self._context.verify(plaintext, digest)
        except (ValueError, TypeError):
            # Unrecognised or corrupt digest; reported like a wrong password
            logger.warning("Stored password digest could not be parsed")
            return False
