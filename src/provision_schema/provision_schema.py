"""Ordered, best-effort provisioning of schema objects, storage and seed data."""

from __future__ import annotations

import logging
from functools import partial

from sqlalchemy.engine import Engine

from common.config import BucketConfig
from provision_schema.models import STATUS_FAILED, ProvisionStep, StepResult
from provision_schema.steps import (
    ADD_MAX_SALES_QUANTITY_COLUMN,
    MAX_SALES_QUANTITY_CONSTRAINT,
    MAX_SALES_QUANTITY_INDEX,
    POST_EXTERNAL_REF,
    SCHEMA_COMMENTS,
    STOCK_TRIGGER,
    STOCK_TRIGGER_FUNCTION,
    Buckets,
    ensure_bucket,
    seed_nutrition_categories,
    seed_product_categories,
    sql_step,
    verify_tables,
)

logger = logging.getLogger(__name__)


def build_default_steps(
    engine: Engine,
    buckets: Buckets,
    bucket_config: BucketConfig,
) -> list[ProvisionStep]:
    """Return the provisioning steps in execution order."""
    return [
        ProvisionStep(
            "max_sales_quantity_column",
            "Add products.max_sales_quantity",
            sql_step(engine, ADD_MAX_SALES_QUANTITY_COLUMN, "max_sales_quantity column present"),
        ),
        ProvisionStep(
            "max_sales_quantity_constraint",
            "Recreate the positive max_sales_quantity check",
            sql_step(engine, MAX_SALES_QUANTITY_CONSTRAINT, "check constraint recreated"),
        ),
        ProvisionStep(
            "max_sales_quantity_index",
            "Index products.max_sales_quantity",
            sql_step(engine, MAX_SALES_QUANTITY_INDEX, "index present"),
        ),
        ProvisionStep(
            "stock_trigger_function",
            "Create the stock status trigger function",
            sql_step(engine, STOCK_TRIGGER_FUNCTION, "trigger function created"),
        ),
        ProvisionStep(
            "stock_trigger",
            "Attach the stock status trigger to products",
            sql_step(engine, STOCK_TRIGGER, "trigger created"),
        ),
        ProvisionStep(
            "schema_comments",
            "Describe the new column and function",
            sql_step(engine, SCHEMA_COMMENTS, "comments added"),
        ),
        ProvisionStep(
            "post_external_ref",
            "Add nutrition_posts.external_ref with a unique index",
            sql_step(engine, POST_EXTERNAL_REF, "external_ref column and index present"),
        ),
        ProvisionStep(
            "product_images_bucket",
            f"Ensure storage bucket {bucket_config.bucket_id} exists",
            partial(ensure_bucket, buckets, bucket_config),
        ),
        ProvisionStep(
            "nutrition_categories",
            "Upsert default nutrition categories",
            partial(seed_nutrition_categories, engine),
        ),
        ProvisionStep(
            "product_categories",
            "Upsert default product categories",
            partial(seed_product_categories, engine),
        ),
        ProvisionStep(
            "verify_tables",
            "Check that all required tables are accessible",
            partial(verify_tables, engine),
        ),
    ]


def run_steps(steps: list[ProvisionStep]) -> list[StepResult]:
    """
    Run every step in order, recording each outcome.

    A failing step is logged and recorded; later steps still run.
    """
    results = []
    for index, step in enumerate(steps, start=1):
        logger.info("[%d/%d] %s", index, len(steps), step.description)
        try:
            status, message = step.run()
        except Exception as e:
            logger.error("Step %s failed: %s", step.name, e)
            results.append(StepResult(step.name, STATUS_FAILED, str(e)))
            continue

        logger.info("Step %s %s: %s", step.name, status, message)
        results.append(StepResult(step.name, status, message))

    return results


def log_results(results: list[StepResult]) -> None:
    failed = [result for result in results if result.failed]
    logger.info("Provisioning finished: %d steps, %d failed", len(results), len(failed))
    for result in results:
        logger.info("  %-32s %s", result.name, result.status)
    if failed:
        logger.warning("Failed steps can be retried by rerunning provisioning")
