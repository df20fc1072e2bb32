"""CLI for provisioning schema objects, storage and default rows."""

from __future__ import annotations

import argparse
import logging

from common.cli_helpers import add_config_argument, setup_logging
from common.config import (
    DATABASE_URL,
    SUPABASE_SERVICE_ROLE_KEY,
    SUPABASE_URL,
    ConfigurationError,
    load_config,
    load_settings,
)
from common.db import create_db_engine
from common.storage import BucketClient
from provision_schema.provision_schema import build_default_steps, log_results, run_steps

logger = logging.getLogger(__name__)


def parse_provision_schema_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Provision schema objects, the product image bucket and default categories.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List provisioning steps without running them",
    )
    add_config_argument(parser)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_provision_schema_args(argv)
    setup_logging()

    try:
        config = load_config(args.config)
        settings = load_settings(required=(DATABASE_URL, SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY))
    except (FileNotFoundError, ConfigurationError) as e:
        logger.error("%s", e)
        raise SystemExit(1)

    engine = create_db_engine(settings.database_url)
    try:
        buckets = BucketClient.from_settings(settings)
        steps = build_default_steps(engine, buckets, config.bucket)

        if args.list:
            for step in steps:
                print(f"{step.name}: {step.description}")
            return

        log_results(run_steps(steps))
    except Exception:
        logger.exception("Provisioning failed")
        raise SystemExit(1)
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
