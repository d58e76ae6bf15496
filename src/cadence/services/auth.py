"""Signed init-data validation.

The client sends a query string with a ``hash`` field computed as
HMAC-SHA256 over the sorted ``key=value`` lines of the other fields.
"""
import hashlib
import hmac
import json
import time
from urllib.parse import parse_qsl

from cadence.core.errors import AuthenticationError


def _secret_key(secret: str) -> bytes:
    return hmac.new(b"CadenceInitData", secret.encode(), hashlib.sha256).digest()


def data_check_string(fields: dict) -> str:
    return "\n".join(f"{k}={v}" for k, v in sorted(fields.items()))


def sign_init_data(fields: dict, secret: str) -> str:
    """Compute the hash for ``fields``; used by clients and tests."""
    return hmac.new(_secret_key(secret), data_check_string(fields).encode(), hashlib.sha256).hexdigest()


def validate_init_data(init_data: str, secret: str, max_age_sec: int = 24 * 3600) -> dict:
    """Validate signed init data and return the parsed fields."""
    parsed = dict(parse_qsl(init_data, keep_blank_values=True))
    received_hash = parsed.pop("hash", None)
    if not received_hash:
        raise AuthenticationError("hash missing")

    calc_hash = sign_init_data(parsed, secret)
    if not hmac.compare_digest(calc_hash, received_hash):
        raise AuthenticationError("invalid hash")

    auth_date = parsed.get("auth_date")
    if auth_date and max_age_sec:
        try:
            ts = int(auth_date)
        except ValueError as exc:
            raise AuthenticationError("invalid auth_date") from exc
        if time.time() - ts > max_age_sec:
            raise AuthenticationError("init data expired")

    if "user" in parsed:
        try:
            parsed["user"] = json.loads(parsed["user"])
        except json.JSONDecodeError as exc:
            raise AuthenticationError("invalid user payload") from exc
    return parsed


def authenticate(init_data: str, secret: str, max_age_sec: int = 24 * 3600) -> str:
    """Return the opaque external player token carried by ``init_data``."""
    data = validate_init_data(init_data, secret, max_age_sec)
    user = data.get("user") or {}
    token = user.get("id") if isinstance(user, dict) else None
    if not token:
        raise AuthenticationError("user id missing in init data")
    return str(token)
