"""Tests for api/errors.py."""

import logging

from api.errors import ERROR_CODE_HEADER, to_http_exception
from modules.billing.exceptions import PeriodNotFoundError
from modules.usage.exceptions import UpstreamUnavailableError


class TestToHttpException:
    def test_not_found_keeps_message(self, caplog):
        """A 404 should carry the error's own message and is not logged."""
        with caplog.at_level(logging.ERROR, logger="api.errors"):
            exc = to_http_exception(PeriodNotFoundError(4), "Failed to get period summary")

        assert exc.status_code == 404
        assert exc.detail == "Period 4 not found"
        assert exc.headers == {ERROR_CODE_HEADER: "PERIOD_NOT_FOUND"}
        assert caplog.records == []

    def test_server_error_uses_fallback(self, caplog):
        """A server error should answer with the fallback and log the cause."""
        error = UpstreamUnavailableError("connection refused")

        with caplog.at_level(logging.ERROR, logger="api.errors"):
            exc = to_http_exception(error, "Failed to get periods")

        assert exc.status_code == 500
        assert exc.detail == "Failed to get periods"
        assert exc.headers[ERROR_CODE_HEADER] == error.code
        assert "connection refused" in caplog.text
        assert "service=admin-api" in caplog.text
