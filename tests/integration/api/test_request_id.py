"""Integration tests for the request id middleware."""

from __future__ import annotations

import logging
import re

import pytest
from httpx import AsyncClient

from vidshare.api.middleware.request_id import (
    MAX_REQUEST_ID_LENGTH,
    REQUEST_ID_HEADER,
    RequestIdFilter,
    request_id_var,
    resolve_request_id,
)

pytestmark = pytest.mark.asyncio

GENERATED_ID = re.compile(r"^[0-9a-f]{32}$")


class TestRequestIdHeader:
    async def test_generated_when_absent(self, async_client: AsyncClient) -> None:
        first = await async_client.get("/api/v1/health")
        second = await async_client.get("/api/v1/health")

        assert GENERATED_ID.match(first.headers[REQUEST_ID_HEADER])
        assert first.headers[REQUEST_ID_HEADER] != second.headers[REQUEST_ID_HEADER]

    async def test_client_value_echoed(self, async_client: AsyncClient) -> None:
        response = await async_client.get(
            "/api/v1/health", headers={REQUEST_ID_HEADER: "trace-abc-123"}
        )
        assert response.headers[REQUEST_ID_HEADER] == "trace-abc-123"

    async def test_present_on_error_responses(self, async_client: AsyncClient) -> None:
        response = await async_client.get(
            "/api/v1/videos", headers={REQUEST_ID_HEADER: "err-1"}
        )

        assert response.status_code == 401
        assert response.headers[REQUEST_ID_HEADER] == "err-1"


class TestResolveRequestId:
    async def test_overlong_value_truncated(self) -> None:
        assert len(resolve_request_id("x" * 500)) == MAX_REQUEST_ID_LENGTH

    @pytest.mark.parametrize("value", ["has space", "tab\tvalue", "café"])
    async def test_unsafe_value_replaced(self, value: str) -> None:
        assert GENERATED_ID.match(resolve_request_id(value))

    async def test_log_filter_uses_context(self) -> None:
        record = logging.LogRecord("vidshare", logging.INFO, "", 0, "msg", None, None)
        token = request_id_var.set("req-9")
        try:
            RequestIdFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "req-9"

    async def test_log_filter_outside_request(self) -> None:
        record = logging.LogRecord("vidshare", logging.INFO, "", 0, "msg", None, None)
        RequestIdFilter().filter(record)
        assert record.request_id == "-"
