"""
Command line entry point.

    seo-audit audit https://example.com
    seo-audit health
    seo-audit serve --port 8000
"""
from __future__ import annotations

import argparse
import json
import os
import sys

from dotenv import load_dotenv

from analyzers.orchestrator import run_audit, run_health_check
from config import HEALTH_CHECK_URL, configure_logging
from crawler.fetcher import validate_url
from errors import AuditError, ValidationError
from models import to_dict
from scoring.scorer import score_label


def _cmd_audit(args: argparse.Namespace) -> int:
    try:
        url = validate_url(args.url)
    except ValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        report = run_audit(url)
    except AuditError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(to_dict(report), indent=args.indent))
    print(
        f"Overall score: {report.overall_score} ({score_label(report.overall_score)}), "
        f"{len(report.technical_issues)} technical issue(s)",
        file=sys.stderr,
    )
    return 0


def _cmd_health(args: argparse.Namespace) -> int:
    report = run_health_check(args.url)
    print(json.dumps(to_dict(report), indent=2))
    return 0 if report.all_tests_passed else 1


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("app:app", host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="seo-audit", description="On-page SEO and technical health audits.")
    p.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    sub = p.add_subparsers(dest="command", required=True)

    audit = sub.add_parser("audit", help="Audit one URL and print the JSON report")
    audit.add_argument("url")
    audit.add_argument("--indent", type=int, default=2)
    audit.set_defaults(func=_cmd_audit)

    health = sub.add_parser("health", help="Run the component self test")
    health.add_argument("--url", default=HEALTH_CHECK_URL)
    health.set_defaults(func=_cmd_health)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=os.getenv("SEO_AUDIT_HOST", "127.0.0.1"))
    serve.add_argument("--port", type=int, default=int(os.getenv("SEO_AUDIT_PORT", "8000")))
    serve.set_defaults(func=_cmd_serve)
    return p


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
