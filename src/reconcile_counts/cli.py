"""CLI for recomputing category and tag post counts."""

from __future__ import annotations

import argparse
import logging

from common.cli_helpers import setup_logging
from common.config import ConfigurationError, load_settings
from common.db import get_session
from common.store import NutritionStore
from reconcile_counts.reconcile_counts import reconcile_counts

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Recompute post_count on categories and tags.",
    )
    parser.parse_args(argv)

    setup_logging()

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("%s", e)
        raise SystemExit(1)

    try:
        with get_session(settings.database_url) as session:
            reconcile_counts(NutritionStore(session))
    except Exception:
        logger.exception("Count reconciliation failed")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
