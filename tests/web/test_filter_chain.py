"""Tests for WebFilterChainMiddleware and the built-in request logging filter."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from flyvalid.container.ordering import HIGHEST_PRECEDENCE, order
from flyvalid.validation.message import Message
from flyvalid.validation.validator import Validator
from flyvalid.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from flyvalid.web.adapters.starlette.filters import RequestLoggingFilter
from flyvalid.web.filters import OncePerRequestFilter


@order(HIGHEST_PRECEDENCE + 10)
class OuterFilter(OncePerRequestFilter):
    async def do_filter(self, request, call_next):
        request.state.trail = ["outer"]
        response = await call_next(request)
        response.headers["X-Trail"] = ",".join(request.state.trail)
        return response


@order(HIGHEST_PRECEDENCE + 20)
class InnerFilter(OncePerRequestFilter):
    async def do_filter(self, request, call_next):
        request.state.trail.append("inner")
        return await call_next(request)


class ApiOnlyFilter(OncePerRequestFilter):
    url_patterns = ["/api/*"]
    exclude_patterns = ["/api/health"]

    async def do_filter(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Api"] = "yes"
        return response


async def _endpoint(request: Request) -> JSONResponse:
    validator = Validator()
    validator.add(Message.warn("x", "y"))
    request.state.validator = validator
    return JSONResponse({"path": request.url.path})


def _make_app() -> Starlette:
    return Starlette(
        routes=[Route("/page", _endpoint), Route("/api/clientes", _endpoint), Route("/api/health", _endpoint)],
        middleware=[
            Middleware(
                WebFilterChainMiddleware,
                filters=[InnerFilter(), ApiOnlyFilter(), RequestLoggingFilter(), OuterFilter()],
            )
        ],
    )


class TestWebFilterChain:
    def test_filters_run_in_order(self):
        response = TestClient(_make_app()).get("/page")
        assert response.headers["X-Trail"] == "outer,inner"
        assert response.json() == {"path": "/page"}

    def test_url_patterns(self):
        client = TestClient(_make_app())
        assert client.get("/api/clientes").headers.get("X-Api") == "yes"
        assert "X-Api" not in client.get("/page").headers
        assert "X-Api" not in client.get("/api/health").headers
