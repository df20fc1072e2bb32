"""Tests for provision_schema orchestration and CLI."""

from unittest.mock import MagicMock, patch

import pytest

from common.config import BucketConfig, ConfigurationError
from provision_schema.cli import main
from provision_schema.models import (
    STATUS_FAILED,
    STATUS_OK,
    STATUS_SKIPPED,
    ProvisionStep,
    StepResult,
)
from provision_schema.provision_schema import build_default_steps, run_steps


def _step(name, run):
    return ProvisionStep(name, f"run {name}", run)


def _fail():
    raise RuntimeError("permission denied")


class TestRunSteps:
    def test_failure_does_not_stop_later_steps(self) -> None:
        later = MagicMock(return_value=(STATUS_OK, "done"))
        steps = [
            _step("first", lambda: (STATUS_OK, "done")),
            _step("second", _fail),
            _step("third", later),
        ]

        results = run_steps(steps)

        later.assert_called_once()
        assert [r.status for r in results] == [STATUS_OK, STATUS_FAILED, STATUS_OK]
        assert results[1].failed
        assert "permission denied" in results[1].message

    def test_skipped_status_recorded(self) -> None:
        results = run_steps([_step("bucket", lambda: (STATUS_SKIPPED, "already present"))])
        assert results[0].status == STATUS_SKIPPED
        assert not results[0].failed

    def test_empty_steps(self) -> None:
        assert run_steps([]) == []


class TestBuildDefaultSteps:
    def test_step_order(self) -> None:
        steps = build_default_steps(MagicMock(), MagicMock(), BucketConfig())
        assert [step.name for step in steps] == [
            "max_sales_quantity_column",
            "max_sales_quantity_constraint",
            "max_sales_quantity_index",
            "stock_trigger_function",
            "stock_trigger",
            "schema_comments",
            "post_external_ref",
            "product_images_bucket",
            "nutrition_categories",
            "product_categories",
            "verify_tables",
        ]

    def test_building_steps_runs_nothing(self) -> None:
        engine = MagicMock()
        buckets = MagicMock()
        build_default_steps(engine, buckets, BucketConfig())
        engine.begin.assert_not_called()
        buckets.get_bucket.assert_not_called()

    def test_whole_sequence_continues_past_failing_bucket(self) -> None:
        engine = MagicMock()
        buckets = MagicMock()
        buckets.get_bucket.side_effect = RuntimeError("storage unavailable")
        steps = [
            step for step in build_default_steps(engine, buckets, BucketConfig())
            if step.name not in ("nutrition_categories", "product_categories")
        ]

        results = run_steps(steps)

        by_name = {r.name: r for r in results}
        assert by_name["product_images_bucket"].failed
        assert by_name["verify_tables"].status == STATUS_OK
        assert sum(r.failed for r in results) == 1


class TestMain:
    @patch("provision_schema.cli.load_settings")
    def test_missing_environment_exits_1(self, mock_settings) -> None:
        mock_settings.side_effect = ConfigurationError("Missing required environment variables: SUPABASE_URL")
        with pytest.raises(SystemExit) as exc:
            main(["--config", "test"])
        assert exc.value.code == 1

    def test_missing_config_file_exits_1(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--config", "no-such-config"])
        assert exc.value.code == 1

    @patch("provision_schema.cli.run_steps")
    @patch("provision_schema.cli.BucketClient")
    @patch("provision_schema.cli.create_db_engine")
    @patch("provision_schema.cli.load_settings")
    def test_list_does_not_run_steps(
        self, mock_settings, mock_engine, mock_buckets, mock_run, capsys
    ) -> None:
        main(["--list", "--config", "test"])

        mock_run.assert_not_called()
        out = capsys.readouterr().out
        assert "max_sales_quantity_column" in out
        assert "product-images-test" in out
        mock_engine.return_value.dispose.assert_called_once()

    @patch("provision_schema.cli.run_steps")
    @patch("provision_schema.cli.BucketClient")
    @patch("provision_schema.cli.create_db_engine")
    @patch("provision_schema.cli.load_settings")
    def test_step_failures_do_not_change_exit(
        self, mock_settings, mock_engine, mock_buckets, mock_run
    ) -> None:
        mock_run.return_value = [StepResult("stock_trigger", STATUS_FAILED, "boom")]

        main(["--config", "test"])

        mock_run.assert_called_once()
