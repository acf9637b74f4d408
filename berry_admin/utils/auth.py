"""Password, session token and recovery code helpers."""
import secrets

import bcrypt

from berry_admin.config import settings

SESSION_TOKEN_BYTES = 32
RECOVERY_CODE_DIGITS = 6
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=settings.bcrypt_rounds)).decode("ascii")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        # not a bcrypt digest
        return False


def new_session_token() -> str:
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def new_recovery_code() -> str:
    return str(secrets.randbelow(10**RECOVERY_CODE_DIGITS)).zfill(RECOVERY_CODE_DIGITS)


def is_well_formed_token(token: str | None) -> bool:
    """Session tokens are exactly 64 lowercase hex characters."""
    if not token or len(token) != SESSION_TOKEN_BYTES * 2:
        return False
    return all(c in "0123456789abcdef" for c in token)
