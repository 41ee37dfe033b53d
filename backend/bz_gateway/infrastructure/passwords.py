"""Password Hashing — bcrypt hashes for website-user passwords.

Invariants:
    - New passwords are always stored as bcrypt hashes
    - Rows written before hashing was introduced hold plaintext; they still verify (constant-time compare)
"""

import hmac

import bcrypt

BCRYPT_ROUNDS = 12
_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(password: str) -> str:
    pwd_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return pwd_hash.decode("utf-8")


def verify_password(password: str, stored: str | None) -> bool:
    if not stored:
        return False
    if not stored.startswith(_BCRYPT_PREFIXES):
        return hmac.compare_digest(password.encode("utf-8"), stored.encode("utf-8"))
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored.encode("utf-8"))
    except ValueError:
        return False
