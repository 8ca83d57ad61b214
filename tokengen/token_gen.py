"""Mint and verify HS256 JSON Web Tokens.

A token carries a fixed-shape claim set::

    {"sub": <subject>, "nbf": now, "iat": now, "exp": now + lifetime}

with ``now`` floored to whole epoch seconds. Signing and base64url encoding are
left to PyJWT.
"""
import base64
import logging
import time

import jwt
from pydantic import BaseModel, Field, ValidationError, model_validator

from .settings import DEFAULT_SUBJECT, ONE_DAY

logger = logging.getLogger(__name__)


class SigningError(Exception):
    """The token could not be signed. No partial token exists."""


class TokenVerificationError(Exception):
    pass


class TokenExpiredError(TokenVerificationError):
    pass


class Claims(BaseModel):
    sub: str = Field(..., min_length=1)
    nbf: int
    iat: int
    exp: int

    @model_validator(mode="after")
    def check_window(self):
        if self.nbf != self.iat:
            raise ValueError("nbf must equal iat")
        if self.exp < self.iat:
            raise ValueError("exp must not precede iat")
        return self


def coerce_key(secret: str | bytes | None, encoding: str = "utf8") -> bytes:
    """Turn configured key text into HMAC key bytes.

    ``utf8`` uses the text as-is, which is how the key literal was always fed
    to the signer. ``hex`` and ``base64`` decode the text first.
    """
    if isinstance(secret, bytes):
        key = secret
    elif not secret:
        key = b""
    elif encoding == "utf8":
        key = secret.encode("utf-8")
    elif encoding == "hex":
        try:
            key = bytes.fromhex(secret)
        except ValueError as e:
            raise SigningError(f"Bad hex key: {e}") from e
    elif encoding == "base64":
        try:
            key = base64.b64decode(secret, validate=True)
        except ValueError as e:
            raise SigningError(f"Bad base64 key: {e}") from e
    else:
        raise SigningError(f"Unknown key encoding: {encoding!r}")
    if not key:
        raise SigningError("JWT secret is empty or not set")
    return key


def build_claims(subject: str = DEFAULT_SUBJECT, now: int | None = None, lifetime: int = ONE_DAY) -> Claims:
    if now is None:
        now = int(time.time())
    try:
        return Claims(sub=subject, nbf=now, iat=now, exp=now + lifetime)
    except ValidationError as e:
        raise SigningError(f"Bad claims: {e}") from e


def generate_token(
    secret: str | bytes | None,
    subject: str = DEFAULT_SUBJECT,
    lifetime: int = ONE_DAY,
    now: int | None = None,
    algorithm: str = "HS256",
    encoding: str = "utf8",
) -> str:
    key = coerce_key(secret, encoding)
    claims = build_claims(subject, now, lifetime)
    try:
        token = jwt.encode(claims.model_dump(), key, algorithm=algorithm)
    except NotImplementedError as e:
        raise SigningError(f"Unsupported algorithm: {algorithm}") from e
    except (jwt.PyJWTError, TypeError, ValueError) as e:
        raise SigningError(f"Signing failed: {e}") from e
    logger.debug("Issued %s token for sub=%s exp=%d", algorithm, claims.sub, claims.exp)
    return token


def decode_token(
    token: str,
    secret: str | bytes | None,
    algorithms=("HS256",),
    verify_exp: bool = True,
    encoding: str = "utf8",
) -> dict:
    try:
        key = coerce_key(secret, encoding)
    except SigningError as e:
        raise TokenVerificationError(str(e)) from e
    options = {"require": ["sub", "nbf", "iat", "exp"], "verify_exp": verify_exp}
    try:
        return jwt.decode(token, key, algorithms=list(algorithms), options=options)
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenVerificationError(f"Invalid token: {e}") from e
