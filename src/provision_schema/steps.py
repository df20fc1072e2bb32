"""Individual provisioning steps: DDL, storage bucket and seed rows."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from common.config import BucketConfig
from common.store import NutritionStore
from provision_schema.models import STATUS_OK, STATUS_SKIPPED

logger = logging.getLogger(__name__)

ADD_MAX_SALES_QUANTITY_COLUMN = (
    """
    ALTER TABLE products
    ADD COLUMN IF NOT EXISTS max_sales_quantity INTEGER DEFAULT NULL
    """,
)

MAX_SALES_QUANTITY_CONSTRAINT = (
    """
    ALTER TABLE products
    DROP CONSTRAINT IF EXISTS check_max_sales_quantity_positive
    """,
    """
    ALTER TABLE products
    ADD CONSTRAINT check_max_sales_quantity_positive
    CHECK (max_sales_quantity IS NULL OR max_sales_quantity > 0)
    """,
)

MAX_SALES_QUANTITY_INDEX = (
    """
    CREATE INDEX IF NOT EXISTS idx_products_max_sales_quantity
    ON products(max_sales_quantity)
    """,
)

# Flips status to out_of_stock once purchases reach the limit, and back to
# active when the limit is raised above the purchase count.
STOCK_TRIGGER_FUNCTION = (
    """
    CREATE OR REPLACE FUNCTION check_and_update_product_stock()
    RETURNS TRIGGER AS $$
    BEGIN
        IF NEW.max_sales_quantity IS NOT NULL
           AND NEW.purchase_count >= NEW.max_sales_quantity THEN
            NEW.status = 'out_of_stock';
        ELSIF NEW.max_sales_quantity IS NOT NULL
              AND NEW.purchase_count < NEW.max_sales_quantity
              AND NEW.status = 'out_of_stock' THEN
            NEW.status = 'active';
        END IF;

        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql
    """,
)

STOCK_TRIGGER = (
    "DROP TRIGGER IF EXISTS trigger_check_product_stock ON products",
    """
    CREATE TRIGGER trigger_check_product_stock
        BEFORE UPDATE ON products
        FOR EACH ROW
        EXECUTE FUNCTION check_and_update_product_stock()
    """,
)

SCHEMA_COMMENTS = (
    """
    COMMENT ON COLUMN products.max_sales_quantity
    IS 'Maximum sellable quantity (NULL means unlimited)'
    """,
    """
    COMMENT ON FUNCTION check_and_update_product_stock()
    IS 'Marks products out of stock when purchase_count reaches max_sales_quantity'
    """,
)

POST_EXTERNAL_REF = (
    """
    ALTER TABLE nutrition_posts
    ADD COLUMN IF NOT EXISTS external_ref TEXT
    """,
    """
    CREATE UNIQUE INDEX IF NOT EXISTS idx_nutrition_posts_external_ref
    ON nutrition_posts(external_ref)
    """,
)

DEFAULT_NUTRITION_CATEGORIES = (
    ("diet", "식단 관련 영양 정보"),
    ("supplements", "영양 보충제 관련 정보"),
    ("research", "영양학 연구 정보"),
    ("trends", "영양 트렌드 정보"),
)

DEFAULT_PRODUCT_CATEGORIES = (
    ("health_functional_food", "건강기능식품", "건강 기능성이 인정된 식품"),
    ("protein_food", "단백질 식품", "근육 건강을 위한 단백질 식품"),
    ("healthy_snack", "건강 간식", "건강한 간식거리"),
    ("healthy_juice", "건강 주스", "영양이 풍부한 건강 주스"),
    ("home_meal_replacement", "가정간편식", "간편하게 즐기는 가정식"),
    ("side_dish", "반찬", "맛있는 밑반찬"),
    ("salad", "샐러드", "신선한 샐러드"),
    ("fruit", "과일", "신선한 제철 과일"),
    ("meat", "정육/계란", "신선한 정육/계란"),
    ("seafood", "수산/해산", "신선한 수산/해산"),
)

REQUIRED_TABLES = (
    "categories",
    "tags",
    "nutrition_posts",
    "post_tags",
    "products",
    "product_categories",
    "product_analytics",
)


class ProvisionError(RuntimeError):
    """Raised by a step whose outcome leaves the schema incomplete."""


class Buckets(Protocol):
    def get_bucket(self, bucket_id: str) -> dict[str, Any] | None: ...
    def create_bucket(self, config: BucketConfig) -> None: ...


def execute_statements(engine: Engine, statements: tuple[str, ...]) -> None:
    """Run statements in a single transaction."""
    with engine.begin() as conn:
        for statement in statements:
            conn.execute(text(statement))


def sql_step(engine: Engine, statements: tuple[str, ...], done: str) -> Callable[[], tuple[str, str]]:
    def run() -> tuple[str, str]:
        execute_statements(engine, statements)
        return STATUS_OK, done
    return run


def ensure_bucket(buckets: Buckets, config: BucketConfig) -> tuple[str, str]:
    """Create the storage bucket unless it already exists."""
    existing = buckets.get_bucket(config.bucket_id)
    if existing is not None:
        return (
            STATUS_SKIPPED,
            f"bucket {config.bucket_id} already present "
            f"(public={existing.get('public')}, file_size_limit={existing.get('file_size_limit')})",
        )

    logger.info("Bucket %s not found, creating", config.bucket_id)
    buckets.create_bucket(config)
    return STATUS_OK, f"bucket {config.bucket_id} created"


def seed_nutrition_categories(engine: Engine) -> tuple[str, str]:
    with Session(engine) as session:
        store = NutritionStore(session)
        for name, description in DEFAULT_NUTRITION_CATEGORIES:
            store.upsert_category(name, description)
        store.commit()
    return STATUS_OK, f"{len(DEFAULT_NUTRITION_CATEGORIES)} nutrition categories upserted"


def seed_product_categories(engine: Engine) -> tuple[str, str]:
    with Session(engine) as session:
        store = NutritionStore(session)
        for name, display_name, description in DEFAULT_PRODUCT_CATEGORIES:
            store.upsert_product_category(name, display_name, description)
        store.commit()
    return STATUS_OK, f"{len(DEFAULT_PRODUCT_CATEGORIES)} product categories upserted"


def verify_tables(engine: Engine, tables: tuple[str, ...] = REQUIRED_TABLES) -> tuple[str, str]:
    """Check that every table can be queried."""
    missing = []
    for table in tables:
        try:
            with engine.connect() as conn:
                conn.execute(text(f"SELECT 1 FROM {table} LIMIT 1"))
        except Exception as e:
            logger.warning("Table %s is not accessible: %s", table, e)
            missing.append(table)

    if missing:
        raise ProvisionError(f"tables not accessible: {', '.join(missing)}")
    return STATUS_OK, f"{len(tables)} tables accessible"
