"""Operations tooling to re-validate stored locations against the provider.

Stored locations are never re-checked on the request path, so renamed or
relocated airports stay stale until this tool refreshes them. It selects rows
whose ``updated_at`` is older than ``--max-age-days``, re-resolves each code
through the provider and upserts the result. Returns a summary dictionary so
schedulers and tests can assert on the outcome.
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import structlog

from travelmap.core.config import get_settings
from travelmap.core.exceptions import DomainError
from travelmap.infra.container import open_services
from travelmap.logging import setup_logging
from travelmap.repositories.interfaces import LocationStore
from travelmap.services.location_resolver import LocationResolver

logger = structlog.get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Refresh stale location coordinates")
    parser.add_argument(
        "--max-age-days",
        type=int,
        default=None,
        help="Refresh rows not updated for this many days (default: LOCATION_MAX_AGE_DAYS)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of locations to process",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List stale codes without calling the provider",
    )
    return parser


async def refresh_stale_locations(
    store: LocationStore,
    resolver: LocationResolver,
    *,
    max_age_days: int,
    limit: int | None = None,
    dry_run: bool = False,
    now: datetime | None = None,
) -> dict[str, int]:
    """Re-resolve locations older than ``max_age_days``.

    The summary always contains ``tried``, ``refreshed`` and ``failed``.
    """

    cutoff = (now or datetime.now(UTC)) - timedelta(days=max_age_days)
    stale = await store.list_stale(older_than=cutoff, limit=limit)

    summary = {"tried": 0, "refreshed": 0, "failed": 0}
    for location in stale:
        summary["tried"] += 1
        if dry_run:
            logger.info("location_refresh_dry_run", code=location.code, updated_at=str(location.updated_at))
            continue
        try:
            refreshed = await resolver.refresh(location.code)
        except DomainError as exc:
            summary["failed"] += 1
            logger.warning("location_refresh_failed", code=location.code, error=str(exc))
            continue
        summary["refreshed"] += 1
        if refreshed.coordinates != location.coordinates:
            logger.info(
                "location_moved",
                code=location.code,
                before=list(location.coordinates),
                after=list(refreshed.coordinates),
            )

    logger.info("location_refresh_finished", cutoff=cutoff.isoformat(), **summary)
    return summary


async def _run(args: argparse.Namespace) -> dict[str, int]:
    settings = get_settings()
    max_age_days = args.max_age_days if args.max_age_days is not None else settings.location_max_age_days
    async with open_services(settings) as services:
        return await refresh_stale_locations(
            services.store,
            services.resolver,
            max_age_days=max_age_days,
            limit=args.limit,
            dry_run=args.dry_run,
        )


def main(argv: Sequence[str] | None = None) -> int:
    setup_logging()
    args = _build_parser().parse_args(argv)
    try:
        asyncio.run(_run(args))
    except Exception:  # pragma: no cover - CLI safeguard
        logger.exception("location_refresh_crashed")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
