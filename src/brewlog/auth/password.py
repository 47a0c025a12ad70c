"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks.
The work factor comes from BREWLOG_BCRYPT_ROUNDS (default 12, ~100ms per
hash on modern hardware).

checkpw re-hashes the candidate with the salt and cost embedded in the
stored digest and compares the result in constant time, so a mismatch
takes the same time wherever it occurs.
"""

import re
from typing import Optional

import bcrypt

from brewlog.config import settings
from brewlog.errors import CorruptDigestError

# $2b$12$ + 22 chars of salt + 31 chars of hash, bcrypt's own base64 alphabet
_BCRYPT_DIGEST = re.compile(r"^\$2[abxy]?\$\d{2}\$[./A-Za-z0-9]{53}$")

# bcrypt only looks at the first 72 bytes
_MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt.

    Learn: bcrypt includes a random salt automatically and produces
    hashes starting with "$2b$". Passwords are truncated to 72 bytes
    (bcrypt's limit).
    """
    pw_bytes = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash.

    Returns False on mismatch. Raises CorruptDigestError if the stored
    hash is not a bcrypt digest at all.
    """
    if not isinstance(password_hash, str) or not _BCRYPT_DIGEST.fullmatch(password_hash):
        raise CorruptDigestError()
    pw_bytes = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except ValueError as e:
        raise CorruptDigestError(reason=str(e)) from e
