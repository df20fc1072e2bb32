"""Tests for migrate_posts.helpers module."""

import pytest

from migrate_posts.helpers import get_migration_status, parse_migrate_posts_args, summarize_items


class TestParseMigratePostsArgs:
    def test_defaults_to_migrate(self) -> None:
        args = parse_migrate_posts_args([])
        assert args.command == "migrate"
        assert args.data_path is None
        assert args.config is None

    def test_status_command(self) -> None:
        assert parse_migrate_posts_args(["status"]).command == "status"

    def test_unknown_command_rejected(self) -> None:
        with pytest.raises(SystemExit):
            parse_migrate_posts_args(["rollback"])


class TestSummarizeItems:
    def test_counts_source_types_categories_and_tags(self) -> None:
        items = [
            {"sourceType": "youtube", "category": "diet", "tags": ["a", "b"]},
            {"sourceType": "youtube", "category": "research", "tags": ["c"]},
            {"sourceType": "news"},
        ]

        summary = summarize_items(items)

        assert summary.total_items == 3
        assert summary.source_types == {"youtube": 2, "news": 1}
        assert summary.categories == {"diet": 1, "research": 1, "unknown": 1}
        assert summary.total_tags == 3

    def test_empty_input(self) -> None:
        summary = summarize_items([])
        assert summary.total_items == 0
        assert summary.total_tags == 0


class TestGetMigrationStatus:
    def test_reports_posts_tags_and_categories(self, fake_store) -> None:
        fake_store.find_or_create_tag("protein")
        status = get_migration_status(fake_store)
        assert status == {"Posts": 0, "Tags": 1, "Categories": 4}


class TestBatchSizeOption:
    def test_batch_size_override(self) -> None:
        assert parse_migrate_posts_args(["--batch-size", "25"]).batch_size == 25

    @pytest.mark.parametrize("value", ["0", "-3", "ten"])
    def test_invalid_batch_size_rejected(self, value) -> None:
        with pytest.raises(SystemExit):
            parse_migrate_posts_args(["--batch-size", value])
