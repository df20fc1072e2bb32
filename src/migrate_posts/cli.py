"""CLI for migrating legacy nutrition items into the database."""

from __future__ import annotations

import json
import logging

from common.cli_helpers import setup_logging
from common.config import AppConfig, ConfigurationError, get_config, load_config, load_settings
from common.db import get_session
from common.local_io import load_legacy_items
from common.store import NutritionStore
from migrate_posts.helpers import (
    log_item_summary,
    log_migration_status,
    parse_migrate_posts_args,
    summarize_items,
)
from migrate_posts.migrate_posts import MigrationError, migrate_items
from reconcile_counts.reconcile_counts import reconcile_counts

logger = logging.getLogger(__name__)


def _load_app_config(config_name: str | None) -> AppConfig:
    if config_name is None:
        return get_config()
    return load_config(config_name)


def _load_items(path: str) -> list[dict]:
    try:
        return load_legacy_items(path)
    except (OSError, json.JSONDecodeError, ValueError) as e:
        logger.error("Error loading legacy data from %s: %s", path, e)
        raise SystemExit(1)


def main(argv: list[str] | None = None) -> None:
    args = parse_migrate_posts_args(argv)
    setup_logging()

    try:
        config = _load_app_config(args.config)
    except (FileNotFoundError, ConfigurationError) as e:
        logger.error("%s", e)
        raise SystemExit(1)

    data_path = args.data_path or config.migration.data_path

    if args.command == "summary":
        log_item_summary(summarize_items(_load_items(data_path)))
        return

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("%s", e)
        raise SystemExit(1)

    items = [] if args.command == "status" else _load_items(data_path)

    try:
        with get_session(settings.database_url) as session:
            store = NutritionStore(session)

            if args.command == "migrate":
                logger.info("Found %d items to migrate", len(items))
                migrate_items(
                    items,
                    store,
                    batch_size=args.batch_size or config.migration.batch_size,
                    batch_delay=config.migration.batch_delay_seconds,
                    language=config.migration.language,
                )
                if items:
                    reconcile_counts(store)

            log_migration_status(store)
    except MigrationError as e:
        logger.error("Migration failed: %s", e)
        raise SystemExit(1)
    except Exception:
        logger.exception("Migration failed")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
