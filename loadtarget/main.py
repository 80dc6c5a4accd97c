from __future__ import annotations

import time
from typing import Callable

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.responses import RedirectResponse
from fastapi.routing import APIRoute
from starlette.routing import Match
from starlette.types import Receive, Scope, Send

from loadtarget import __version__, handlers
from loadtarget.metrics import Metrics


class AnyMethodRoute(APIRoute):
    """Route that matches on path alone; the request method is never checked."""

    def matches(self, scope: Scope) -> tuple[Match, Scope]:
        match, child_scope = super().matches(scope)
        if match is Match.PARTIAL:
            match = Match.FULL
        return match, child_scope

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.app(scope, receive, send)


class InstrumentedRoute(AnyMethodRoute):
    """Route that reports status, method and duration to ``app.state.metrics``.

    The route ``name`` is used as the histogram's handler label.
    """

    def get_route_handler(self) -> Callable:
        route_handler = super().get_route_handler()
        handler_label = self.name

        async def instrumented(request: Request) -> Response:
            t0 = time.perf_counter()
            response = await route_handler(request)
            request.app.state.metrics.observe(
                handler_label, request.method, response.status_code, time.perf_counter() - t0
            )
            return response

        return instrumented


def create_app(metrics: Metrics | None = None) -> FastAPI:
    app = FastAPI(title="loadtarget", version=__version__,
                  docs_url=None, redoc_url=None, openapi_url=None)
    app.state.metrics = metrics if metrics is not None else Metrics()

    plain = APIRouter(route_class=AnyMethodRoute)

    @plain.api_route("/metrics")
    def metrics_endpoint(request: Request):
        body, content_type = request.app.state.metrics.exposition()
        return Response(body, media_type=content_type)

    # "/wait" and "/hash" have subtrees; the bare path redirects into them
    @plain.api_route("/wait")
    def wait_redirect():
        return RedirectResponse("/wait/", status_code=301)

    @plain.api_route("/hash")
    def hash_redirect():
        return RedirectResponse("/hash/", status_code=301)

    # registration order decides precedence: specific patterns first
    instrumented = APIRouter(route_class=InstrumentedRoute)
    routes = [
        ("/err", handlers.not_found, "notfound"),
        ("/internal-err", handlers.internal_error, "internal-error"),
        ("/wait/{wait_sec}", handlers.wait, "wait"),
        ("/wait/{rest:path}", handlers.wait, "wait"),
        ("/hash/{mb}/{iterations}", handlers.hash_work, "hash"),
        ("/hash/{mb}", handlers.hash_work, "hash"),
        ("/hash/{rest:path}", handlers.hash_work, "hash"),
        ("/{rest:path}", handlers.found, "found"),
    ]
    for path, endpoint, name in routes:
        instrumented.add_api_route(path, endpoint, name=name)

    app.include_router(plain)
    app.include_router(instrumented)

    return app
