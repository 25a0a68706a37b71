"""
SEO Audit Service HTTP API.

    POST /audit   {"url": "https://example.com"}  → full audit report
    GET  /health                                  → per-component self test
"""
from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator

from analyzers.orchestrator import run_audit, run_health_check
from config import configure_logging
from crawler.fetcher import validate_url
from errors import AuditError, ValidationError
from models import to_dict

load_dotenv()
configure_logging()

logger = logging.getLogger(__name__)


class AuditRequest(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        try:
            return validate_url(value)
        except ValidationError as exc:
            raise ValueError(str(exc)) from exc


app = FastAPI(
    title="SEO Audit Service",
    description="On-page SEO and technical health audits backed by PageSpeed Insights",
    version="1.0.0",
)


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"message": "Invalid request data", "errors": errors})


@app.post("/audit")
def audit(body: AuditRequest) -> JSONResponse:
    try:
        report = run_audit(body.url)
    except AuditError as exc:
        logger.error("Audit error for %s: %s", body.url, exc)
        return JSONResponse(status_code=500, content={"message": str(exc)})
    except Exception:
        logger.exception("Unexpected audit failure for %s", body.url)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
    return JSONResponse(content=to_dict(report))


@app.get("/health")
def health() -> JSONResponse:
    return JSONResponse(content=to_dict(run_health_check()))
