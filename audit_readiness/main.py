"""
COR Audit Readiness — Main Entry Point

Score an organization (CLI):
    python -m audit_readiness score demo-org
    python -m audit_readiness score demo-org --element 2 --profile documents

Export the audit package:
    python -m audit_readiness export demo-org --format csv

Run as an API server (for the dashboard):
    python -m audit_readiness serve
    # or: uvicorn audit_readiness.api:app --reload --port 8000

Or import and run programmatically:
    from audit_readiness.main import run
    score = run("demo-org")
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone

from audit_readiness.config import get_settings
from audit_readiness.models.enums import ExportFormat, ScoringProfileName
from audit_readiness.models.schemas import ElementScore, OverallScore
from audit_readiness.services.readiness_service import ReadinessService
from audit_readiness.utils.logger import setup_logging


def run(
    organization_id: str,
    element: int | None = None,
    force_refresh: bool = False,
    profile: str = ScoringProfileName.FORMS.value,
) -> OverallScore | ElementScore:
    """Score an organization (or one element) and log a summary."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info("  COR AUDIT READINESS")
    logger.info(
        f"  Mode: {'MOCK' if settings.mock_mode else 'MONGODB'} | "
        f"Started: {datetime.now(timezone.utc).isoformat()}"
    )
    logger.info("=" * 60)

    service = ReadinessService(settings).for_profile(profile)
    result = asyncio.run(service.get_score(organization_id, force_refresh, element))

    if isinstance(result, ElementScore):
        _print_element(result)
    else:
        _print_summary(result)
    return result


def _print_element(score: ElementScore) -> None:
    logger = logging.getLogger(__name__)
    logger.info("")
    logger.info(f"  Element {score.element_number}: {score.element_name}")
    logger.info(
        f"  Score:          {score.earned_points}/{score.max_points} "
        f"({score.percentage:.1f}%, {score.status.value})"
    )
    logger.info(f"  Evidence:       {len(score.evidence)} items")
    for gap in score.gaps:
        logger.info(f"    [{gap.severity.value}] {gap.description} → {gap.action_required}")
    logger.info("")


def _print_summary(score: OverallScore) -> None:
    """Print a human-readable summary of the overall score."""
    logger = logging.getLogger(__name__)

    logger.info("")
    logger.info("-" * 60)
    logger.info("  READINESS SUMMARY")
    logger.info("-" * 60)
    logger.info(f"  Overall:        {score.overall_percentage}% ({score.overall_status.value})")
    logger.info(f"  Audit Ready:    {'YES' if score.ready_for_audit else 'NO'}")
    logger.info(
        f"  Gaps:           {score.critical_gaps_count} critical, {score.major_gaps_count} major, "
        f"{score.minor_gaps_count} minor, {score.observation_gaps_count} observations"
    )
    logger.info(f"  Effort:         ~{score.estimated_hours_to_ready}h")
    logger.info(f"  Projected Date: {score.projected_ready_date.isoformat()}")
    logger.info("-" * 60)

    logger.info(f"\n  Elements: {len(score.element_scores)}")
    for element in score.element_scores:
        logger.info(
            f"    {element.element_number:>2} | {element.element_name:<36} | "
            f"{element.earned_points:>3}/{element.max_points:<3} | "
            f"{element.percentage:5.1f}% | {element.status.value}"
        )

    logger.info("\n  Milestones:")
    for milestone in score.milestones:
        logger.info(
            f"    {milestone.date.isoformat()} | {milestone.name} (≥{milestone.threshold:.0f}%) | "
            f"{milestone.status.value}"
        )
    logger.info("")


def export(
    organization_id: str,
    fmt: str = ExportFormat.JSON.value,
    profile: str = ScoringProfileName.FORMS.value,
) -> str:
    """Return the audit-package export for an organization."""
    settings = get_settings()
    setup_logging(settings.log_level)
    service = ReadinessService(settings).for_profile(profile)
    return asyncio.run(service.export(organization_id, fmt))


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI server (for dashboard communication)."""
    import uvicorn

    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("audit_readiness.api:app", host=host, port=port, reload=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="audit_readiness", description="COR audit readiness scoring")
    sub = parser.add_subparsers(dest="command", required=True)

    profiles = [p.value for p in ScoringProfileName]

    score_cmd = sub.add_parser("score", help="Score an organization")
    score_cmd.add_argument("organization_id")
    score_cmd.add_argument("--element", type=int, default=None, help="Score a single element (1-14)")
    score_cmd.add_argument("--refresh", action="store_true", help="Ignore today's cached score")
    score_cmd.add_argument("--profile", choices=profiles, default=ScoringProfileName.FORMS.value)

    export_cmd = sub.add_parser("export", help="Export the audit package")
    export_cmd.add_argument("organization_id")
    export_cmd.add_argument("--format", dest="fmt", choices=[f.value for f in ExportFormat],
                            default=ExportFormat.JSON.value)
    export_cmd.add_argument("--profile", choices=profiles, default=ScoringProfileName.FORMS.value)

    serve_cmd = sub.add_parser("serve", help="Run the HTTP API")
    serve_cmd.add_argument("--host", default="0.0.0.0")
    serve_cmd.add_argument("--port", type=int, default=8000)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "score":
        run(args.organization_id, args.element, args.refresh, args.profile)
    elif args.command == "export":
        sys.stdout.write(export(args.organization_id, args.fmt, args.profile))
    elif args.command == "serve":
        serve(args.host, args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
