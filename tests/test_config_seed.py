"""Settings validation and default category seeding."""

import pytest
from pydantic import ValidationError

from registry.config import Settings
from registry.db import Database
from registry.seed import DEFAULT_CATEGORIES, seed_categories
from registry.services import categories_service

from tests.conftest import add_category


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None, database_url="")

        assert settings.database_configured is False
        assert settings.trending_default_period == "week"
        assert settings.trending_overfetch_factor == 2
        assert settings.get_cors_origins() == ["*"]

    def test_postgres_scheme_normalized(self) -> None:
        settings = Settings(_env_file=None, database_url=" postgres://u:p@db:5432/registry ")

        assert settings.database_configured is True
        assert settings.get_database_url() == "postgresql://u:p@db:5432/registry"

    def test_unconfigured_url_raises(self) -> None:
        with pytest.raises(ValueError):
            Settings(_env_file=None, database_url="").get_database_url()

    def test_period_is_normalized_and_validated(self) -> None:
        assert Settings(_env_file=None, trending_default_period=" Month ").trending_default_period == "month"
        with pytest.raises(ValidationError):
            Settings(_env_file=None, trending_default_period="year")

    def test_overfetch_factor_minimum(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, trending_overfetch_factor=1)

    def test_cors_origins_split(self) -> None:
        settings = Settings(_env_file=None, cors_origins="https://a.example, https://b.example,")

        assert settings.get_cors_origins() == ["https://a.example", "https://b.example"]


class TestSeedCategories:
    def test_inserts_defaults_once(self, db: Database) -> None:
        assert seed_categories(db) == len(DEFAULT_CATEGORIES)
        assert seed_categories(db) == 0

        slugs = {c.slug for c in categories_service.list_categories(db)}
        assert slugs == {slug for slug, _, _ in DEFAULT_CATEGORIES}

    def test_keeps_existing_rows(self, db: Database) -> None:
        add_category(db, "market", tool_count=4)

        assert seed_categories(db) == len(DEFAULT_CATEGORIES) - 1
        assert categories_service.get_category(db, "market").tool_count == 4
