"""Password hashing helpers backed by Flask-Bcrypt."""

from rhythm.extensions import bcrypt


def hash_password(plain_password: str) -> str:
    return bcrypt.generate_password_hash(plain_password).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return bcrypt.check_password_hash(hashed_password, plain_password)
