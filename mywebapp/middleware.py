"""MyWebApp request middleware components."""

from __future__ import annotations

from uuid import UUID, uuid4

from quart import Quart, Response, g, request

from mywebapp.service_libs.logging_utils import bind_request_context

CORRELATION_ID_HEADER = "X-Correlation-ID"


def setup_correlation_id_middleware(app: Quart) -> None:
    """Ensure every request has a correlation ID and echo it on the response."""

    @app.before_request
    async def assign_correlation_id() -> None:
        """Extract or generate the correlation ID and bind it to the log context."""
        x_correlation_id = request.headers.get(CORRELATION_ID_HEADER)
        if x_correlation_id:
            try:
                correlation_id = UUID(x_correlation_id)
            except ValueError:
                correlation_id = uuid4()
        else:
            correlation_id = uuid4()

        g.correlation_id = correlation_id
        bind_request_context(str(correlation_id), method=request.method, path=request.path)

    @app.after_request
    async def echo_correlation_id(response: Response) -> Response:
        correlation_id = getattr(g, "correlation_id", None)
        if correlation_id is not None:
            response.headers[CORRELATION_ID_HEADER] = str(correlation_id)
        return response
