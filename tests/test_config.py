"""Tests for shared configuration helpers."""

from shared import config


def test_storage_dir_defaults_to_none(monkeypatch) -> None:
    monkeypatch.delenv("FINANCE_STORAGE_DIR", raising=False)

    assert config.storage_dir() is None


def test_storage_dir_strips_value(monkeypatch) -> None:
    monkeypatch.setenv("FINANCE_STORAGE_DIR", "  /tmp/finance ")

    assert config.storage_dir() == "/tmp/finance"


def test_storage_prefix_default_and_override(monkeypatch) -> None:
    monkeypatch.delenv("FINANCE_STORAGE_PREFIX", raising=False)
    assert config.storage_prefix() == "moneywise_"

    monkeypatch.setenv("FINANCE_STORAGE_PREFIX", "")
    assert config.storage_prefix() == ""


def test_storage_max_bytes_uses_default_on_invalid(monkeypatch, caplog) -> None:
    monkeypatch.setenv("FINANCE_STORAGE_MAX_BYTES", "lots")

    assert config.storage_max_bytes() == config.DEFAULT_STORAGE_MAX_BYTES
    assert "config_invalid_int" in caplog.text


def test_default_page_size_rejects_non_positive(monkeypatch) -> None:
    monkeypatch.setenv("FINANCE_DEFAULT_PAGE_SIZE", "0")

    assert config.default_page_size() == 10


def test_default_page_size_override(monkeypatch) -> None:
    monkeypatch.setenv("FINANCE_DEFAULT_PAGE_SIZE", "25")

    assert config.default_page_size() == 25


def test_seed_demo_data_defaults_true(monkeypatch) -> None:
    monkeypatch.delenv("FINANCE_SEED_DEMO_DATA", raising=False)

    assert config.seed_demo_data() is True


def test_seed_demo_data_false_string(monkeypatch) -> None:
    monkeypatch.setenv("FINANCE_SEED_DEMO_DATA", "False")

    assert config.seed_demo_data() is False


def test_auth_credentials_defaults(monkeypatch) -> None:
    monkeypatch.delenv("FINANCE_AUTH_USERNAME", raising=False)
    monkeypatch.delenv("FINANCE_AUTH_PASSWORD", raising=False)

    assert config.auth_username() == "admin"
    assert config.auth_password() == "finance123"


def test_log_level_normalized(monkeypatch) -> None:
    monkeypatch.setenv("FINANCE_LOG_LEVEL", " debug ")

    assert config.log_level() == "DEBUG"


def test_debug_enabled_true_string(monkeypatch) -> None:
    monkeypatch.setenv("FINANCE_DEBUG", "yes")

    assert config.debug_enabled() is True


def test_app_env_defaults_to_dev(monkeypatch) -> None:
    monkeypatch.delenv("APP_ENV", raising=False)

    assert config.app_env() == "dev"


def test_default_page_size_above_model_max_falls_back(monkeypatch, caplog) -> None:
    monkeypatch.setenv("FINANCE_DEFAULT_PAGE_SIZE", "1000")

    assert config.default_page_size() == config.DEFAULT_PAGE_SIZE
    assert "config_page_size_above_max" in caplog.text


def test_default_page_size_at_model_max_is_kept(monkeypatch) -> None:
    monkeypatch.setenv("FINANCE_DEFAULT_PAGE_SIZE", str(config.MAX_PAGE_SIZE))

    assert config.default_page_size() == config.MAX_PAGE_SIZE
