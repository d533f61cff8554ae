# tests/unit/core/test_errors.py — v1
"""Tests for core/errors.py — error kinds, classification, retryability."""

from __future__ import annotations

import asyncio

import pytest

from aigate.core.errors import (
    AIServiceError,
    BackendUnavailableError,
    ErrorKind,
    classify_exception,
    is_retryable,
    to_service_error,
)


class _StatusError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class TestErrorKind:
    @pytest.mark.parametrize(
        "kind",
        [ErrorKind.API_ERROR, ErrorKind.NETWORK_ERROR, ErrorKind.TIMEOUT_ERROR,
         ErrorKind.INVALID_RESPONSE],
    )
    def test_recoverable(self, kind):
        assert kind.recoverable is True

    @pytest.mark.parametrize("kind", [ErrorKind.RATE_LIMIT, ErrorKind.INVALID_API_KEY])
    def test_not_recoverable(self, kind):
        assert kind.recoverable is False


class TestAIServiceError:
    def test_default_message(self):
        err = AIServiceError(ErrorKind.TIMEOUT_ERROR)
        assert "timed out" in err.message
        assert err.recoverable is True

    def test_backend_unavailable_is_recoverable_api_error(self):
        err = BackendUnavailableError()
        assert err.kind == ErrorKind.API_ERROR
        assert err.recoverable is True
        assert err.message == "AI service not available (no API key configured)"


class TestClassifyException:
    def test_timeout(self):
        assert classify_exception(asyncio.TimeoutError()) == ErrorKind.TIMEOUT_ERROR

    def test_api_key(self):
        assert classify_exception(Exception("API key not valid")) == ErrorKind.INVALID_API_KEY

    def test_unauthorized_status(self):
        assert classify_exception(_StatusError("nope", 401)) == ErrorKind.INVALID_API_KEY

    def test_network(self):
        assert classify_exception(ConnectionError("refused")) == ErrorKind.NETWORK_ERROR
        assert classify_exception(Exception("fetch failed")) == ErrorKind.NETWORK_ERROR

    def test_parse(self):
        assert classify_exception(ValueError("bad json")) == ErrorKind.INVALID_RESPONSE

    def test_default(self):
        assert classify_exception(RuntimeError("boom")) == ErrorKind.API_ERROR

    def test_service_error_passthrough(self):
        err = AIServiceError(ErrorKind.RATE_LIMIT)
        assert classify_exception(err) == ErrorKind.RATE_LIMIT


class TestIsRetryable:
    def test_timeout_not_retried(self):
        assert is_retryable(asyncio.TimeoutError()) is False

    @pytest.mark.parametrize("status", [429, 500, 502, 503])
    def test_retryable_status(self, status):
        assert is_retryable(_StatusError("upstream", status)) is True

    @pytest.mark.parametrize("status", [400, 401, 403, 404])
    def test_client_status(self, status):
        assert is_retryable(_StatusError("client", status)) is False

    def test_network_message(self):
        assert is_retryable(Exception("network unreachable")) is True

    def test_service_unavailable_message(self):
        assert is_retryable(Exception("503 Service Unavailable")) is True

    def test_invalid_request_message(self):
        assert is_retryable(Exception("Bad Request: invalid field")) is False


class TestToServiceError:
    def test_idempotent(self):
        err = AIServiceError(ErrorKind.NETWORK_ERROR)
        assert to_service_error(err) is err

    def test_wraps_with_retryable_flag(self):
        err = to_service_error(_StatusError("Service Unavailable", 503))
        assert err.kind == ErrorKind.API_ERROR
        assert err.retryable is True

    def test_uses_default_message_for_known_kinds(self):
        err = to_service_error(asyncio.TimeoutError())
        assert err.kind == ErrorKind.TIMEOUT_ERROR
        assert err.retryable is False
