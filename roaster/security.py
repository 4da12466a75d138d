"""Password hashing and verification

- Passlib manages the hashes; pbkdf2_sha256 is preferred, bcrypt hashes still verify.
- bcrypt only looks at the first 72 bytes, so longer passwords are truncated before hashing.
"""

import secrets
import string

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plain text password."""
    if isinstance(password, str):
        pw_bytes = password.encode('utf-8')
    else:
        pw_bytes = password
    if len(pw_bytes) > 72:
        password = pw_bytes[:72].decode('utf-8', errors='ignore')
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its hash; an unreadable hash counts as a mismatch."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def generate_temporary_password(length: int = 12) -> str:
    """Random password handed out once by an admin reset"""
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))
