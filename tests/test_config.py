# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from vcf_tasks.config import Settings


def test_settings_defaults(monkeypatch) -> None:
    for name in (
        "VCF_HOST",
        "VCF_USERNAME",
        "VCF_PASSWORD",
        "VCF_ALLOW_UNVERIFIED_TLS",
        "VCF_API_TIMEOUT_SECONDS",
        "VCF_POLLING_INTERVAL_SECONDS",
        "VCF_LOG_LEVEL",
        "VCF_DATA_DIR",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.polling_interval_seconds == 20.0
    assert s.api_timeout_seconds == 120.0
    assert s.allow_unverified_tls is False
    assert s.log_level == "INFO"
    assert s.data_dir == Path(".local/vcf")
    assert s.base_url == ""


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("VCF_HOST", "sddc-manager.example.test/")
    monkeypatch.setenv("VCF_USERNAME", " admin@local ")
    monkeypatch.setenv("VCF_PASSWORD", "secret")
    monkeypatch.setenv("VCF_ALLOW_UNVERIFIED_TLS", "yes")
    monkeypatch.setenv("VCF_API_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("VCF_POLLING_INTERVAL_SECONDS", "not-a-number")
    monkeypatch.setenv("VCF_DATA_DIR", str(tmp_path))

    s = Settings.from_env()

    assert s.base_url == "https://sddc-manager.example.test"
    assert s.username == "admin@local"
    assert s.allow_unverified_tls is True
    assert s.api_timeout_seconds == 30.0
    assert s.polling_interval_seconds == 20.0
    assert s.data_dir == tmp_path


def test_explicit_scheme_is_kept(monkeypatch) -> None:
    monkeypatch.setenv("VCF_HOST", "http://10.0.0.4:8080")

    assert Settings.from_env().base_url == "http://10.0.0.4:8080"
