# csp_filter/main.py

from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from csp_filter.core.config import Settings, settings as default_settings
from csp_filter.middleware import ContentSecurityPolicyMiddleware, RequestLoggingMiddleware
from csp_filter.routers import reports

logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    policy_config = settings.policy_config()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description="Adds a Content-Security-Policy header to every response and logs violation reports.",
        openapi_tags=[
            {"name": "Reports", "description": "Content-Security-Policy violation reports."},
            {"name": "System", "description": "Liveness."},
        ],
    )

    # Added last so it wraps the CSP middleware and sees its failures too.
    app.add_middleware(ContentSecurityPolicyMiddleware, config=policy_config)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(reports.build_router(settings.CSP_REPORT_PATH))

    @app.get("/healthz", tags=["System"])
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    logger.info(
        "CSP filter ready: report_only=%s report_path=%s",
        policy_config.report_only,
        settings.CSP_REPORT_PATH,
    )
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("csp_filter.main:app", host="0.0.0.0", port=8000, workers=1)
