"""
Name: Settings Validation Tests

Notes:
  - Explicit kwargs override env; env_file is disabled in conftest
"""

import pytest
from pydantic import ValidationError

from staffatt.crosscutting.config import Settings


@pytest.mark.unit
class TestSettings:
    def test_memory_backend_needs_no_database_url(self):
        settings = Settings(store_backend="memory", database_url="")

        assert settings.store_backend == "memory"
        assert settings.jwt_access_ttl_minutes == 30

    def test_postgres_backend_requires_database_url(self):
        with pytest.raises(ValidationError, match="DATABASE_URL"):
            Settings(store_backend="postgres", database_url="")

    def test_unknown_backend_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(store_backend="redis")

    def test_backend_is_normalized(self):
        assert Settings(store_backend=" Memory ").store_backend == "memory"

    def test_token_ttl_is_fixed(self):
        with pytest.raises(ValidationError):
            Settings(store_backend="memory", jwt_access_ttl_minutes=60)

    @pytest.mark.parametrize("field", ["store_timeout_seconds", "db_pool_timeout_seconds"])
    def test_timeouts_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            Settings(store_backend="memory", **{field: 0})

    def test_short_password_policy_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(store_backend="memory", password_min_length=4)

    def test_production_rejects_weak_secret(self):
        with pytest.raises(ValidationError, match="JWT_SECRET"):
            Settings(
                app_env="production",
                store_backend="postgres",
                database_url="postgresql://db/staffatt",
                jwt_secret="changeme",
            )

    def test_production_rejects_short_secret(self):
        with pytest.raises(ValidationError, match="32 characters"):
            Settings(
                app_env="production",
                store_backend="postgres",
                database_url="postgresql://db/staffatt",
                jwt_secret="short-secret",
            )

    def test_production_requires_postgres(self):
        with pytest.raises(ValidationError, match="STORE_BACKEND"):
            Settings(
                app_env="production",
                store_backend="memory",
                jwt_secret="x" * 40,
            )

    def test_allowed_origins_list(self):
        settings = Settings(
            store_backend="memory",
            allowed_origins="http://a.test, http://b.test,,",
        )

        assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]
