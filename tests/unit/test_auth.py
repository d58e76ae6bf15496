"""Unit tests: signed init-data validation."""
import json
import time
from urllib.parse import urlencode

import pytest

from cadence.core.errors import AuthenticationError
from cadence.services.auth import authenticate, sign_init_data, validate_init_data

SECRET = "test-secret"


def _init_data(fields: dict, secret: str = SECRET) -> str:
    return urlencode({**fields, "hash": sign_init_data(fields, secret)})


def test_authenticate_returns_token():
    fields = {"auth_date": str(int(time.time())), "user": json.dumps({"id": 4242, "name": "Robin"})}
    assert authenticate(_init_data(fields), SECRET) == "4242"


def test_tampered_data_rejected():
    fields = {"auth_date": str(int(time.time())), "user": json.dumps({"id": 1})}
    data = _init_data(fields).replace("%3A+1", "%3A+2")
    with pytest.raises(AuthenticationError):
        validate_init_data(data, SECRET)


def test_wrong_secret_rejected():
    fields = {"auth_date": str(int(time.time())), "user": json.dumps({"id": 1})}
    with pytest.raises(AuthenticationError):
        authenticate(_init_data(fields, "other"), SECRET)


def test_expired_rejected():
    fields = {"auth_date": str(int(time.time()) - 10_000), "user": json.dumps({"id": 1})}
    with pytest.raises(AuthenticationError):
        authenticate(_init_data(fields), SECRET, max_age_sec=60)


def test_missing_hash_and_user():
    with pytest.raises(AuthenticationError):
        validate_init_data("auth_date=1", SECRET)
    fields = {"auth_date": str(int(time.time()))}
    with pytest.raises(AuthenticationError):
        authenticate(_init_data(fields), SECRET)
