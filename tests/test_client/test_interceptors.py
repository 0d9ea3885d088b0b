"""Tests for padelapi.client.interceptors -- pipeline ordering and stock interceptors."""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest

from padelapi.client import (
    InterceptorPipeline,
    RequestDescriptor,
    RequestOptions,
    bearer_token_interceptor,
    status_logging_interceptor,
)


def _descriptor(url: str = "https://padel.test/api/users", **headers: str) -> RequestDescriptor:
    return RequestDescriptor(url=url, options=RequestOptions(headers=dict(headers)))


def _response(status: int) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("GET", "https://padel.test/api/users"))


def _tagging(name: str, seen: list[str]):
    def _interceptor(url: str, options: RequestOptions):
        seen.append(name)
        options.headers["X-Trace"] = options.headers.get("X-Trace", "") + name
        return url, options

    return _interceptor


@pytest.mark.asyncio
class TestPipeline:
    async def test_request_interceptors_run_in_registration_order(self) -> None:
        seen: list[str] = []
        pipeline = InterceptorPipeline()
        pipeline.add_request_interceptor(_tagging("A", seen))
        pipeline.add_request_interceptor(_tagging("B", seen))

        result = await pipeline.apply_request(_descriptor())

        assert seen == ["A", "B"]
        assert result.options.headers["X-Trace"] == "AB"

    async def test_response_interceptors_run_in_registration_order(self) -> None:
        seen: list[str] = []
        pipeline = InterceptorPipeline()

        def _make(name: str):
            def _interceptor(response: httpx.Response) -> httpx.Response:
                seen.append(name)
                return response

            return _interceptor

        pipeline.add_response_interceptor(_make("C"))
        pipeline.add_response_interceptor(_make("D"))
        await pipeline.apply_response(_response(200))
        assert seen == ["C", "D"]

    async def test_request_interceptor_can_rewrite_url(self) -> None:
        pipeline = InterceptorPipeline()
        pipeline.add_request_interceptor(
            lambda url, options: (url.replace("/api/", "/api/v2/"), options)
        )
        result = await pipeline.apply_request(_descriptor())
        assert result.url == "https://padel.test/api/v2/users"

    async def test_async_interceptors_awaited_in_order(self) -> None:
        seen: list[str] = []
        pipeline = InterceptorPipeline()

        async def _slow(url: str, options: RequestOptions):
            seen.append("async")
            options.headers["Authorization"] = "Bearer refreshed"
            return url, options

        pipeline.add_request_interceptor(_slow)
        pipeline.add_request_interceptor(_tagging("sync", seen))

        result = await pipeline.apply_request(_descriptor())
        assert seen == ["async", "sync"]
        assert result.options.headers["Authorization"] == "Bearer refreshed"

    async def test_response_interceptor_can_replace_response(self) -> None:
        pipeline = InterceptorPipeline()
        replacement = _response(204)
        pipeline.add_response_interceptor(lambda response: replacement)
        assert await pipeline.apply_response(_response(200)) is replacement

    async def test_empty_pipeline_is_identity(self) -> None:
        pipeline = InterceptorPipeline()
        descriptor = _descriptor(Accept="application/json")
        result = await pipeline.apply_request(descriptor)
        assert result.url == descriptor.url
        assert result.options is descriptor.options


class TestRegistries:
    def test_registries_are_read_only_snapshots(self) -> None:
        pipeline = InterceptorPipeline()
        interceptor = bearer_token_interceptor(lambda: "t")
        pipeline.add_request_interceptor(interceptor)
        assert pipeline.request_interceptors == (interceptor,)
        assert pipeline.response_interceptors == ()
        assert not hasattr(pipeline, "remove_request_interceptor")


class TestBearerToken:
    def test_adds_header(self) -> None:
        interceptor = bearer_token_interceptor(lambda: "abc")
        _, options = interceptor("https://padel.test/x", RequestOptions())
        assert options.headers["Authorization"] == "Bearer abc"

    def test_no_token_no_header(self) -> None:
        interceptor = bearer_token_interceptor(lambda: None)
        _, options = interceptor("https://padel.test/x", RequestOptions())
        assert "Authorization" not in options.headers

    def test_explicit_header_wins(self) -> None:
        interceptor = bearer_token_interceptor(lambda: "abc")
        _, options = interceptor(
            "https://padel.test/x", RequestOptions(headers={"authorization": "Basic xyz"})
        )
        assert options.headers == {"authorization": "Basic xyz"}

    def test_provider_called_per_request(self) -> None:
        tokens = iter(["one", "two"])
        interceptor = bearer_token_interceptor(lambda: next(tokens))
        _, first = interceptor("u", RequestOptions())
        _, second = interceptor("u", RequestOptions())
        assert first.headers["Authorization"] == "Bearer one"
        assert second.headers["Authorization"] == "Bearer two"


class TestStatusLogging:
    def test_unauthorized_warns_and_calls_back(self, verbose_output, capsys) -> None:
        callback = MagicMock()
        interceptor = status_logging_interceptor(on_unauthorized=callback)
        response = _response(401)

        assert interceptor(response) is response
        callback.assert_called_once_with(response)
        assert "Unauthorized: GET https://padel.test/api/users" in capsys.readouterr().err

    def test_forbidden_warns(self, verbose_output, capsys) -> None:
        status_logging_interceptor()(_response(403))
        assert "Access forbidden" in capsys.readouterr().err

    def test_server_error_warns(self, verbose_output, capsys) -> None:
        status_logging_interceptor()(_response(503))
        assert "Server error 503" in capsys.readouterr().err

    def test_success_is_silent(self, verbose_output, capsys) -> None:
        callback = MagicMock()
        status_logging_interceptor(on_unauthorized=callback)(_response(200))
        callback.assert_not_called()
        assert capsys.readouterr().err == ""
