# csp_filter/routers/reports.py

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response, status

# Violation reports go to their own logger so they can be routed separately.
report_logger = logging.getLogger("csp_filter.reports")


async def receive_violation_report(request: Request) -> Response:
    """Log the raw report body as sent by the browser."""
    body = await request.body()
    report_logger.warning(body.decode("utf-8", errors="replace"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def build_router(path: str) -> APIRouter:
    router = APIRouter(tags=["Reports"])
    router.add_api_route(
        path,
        receive_violation_report,
        methods=["POST"],
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        summary="Log a Content-Security-Policy violation report",
    )
    return router
