from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from bfhl_service.config import Settings
from bfhl_service.llm import OpenAIAnswerProvider
from bfhl_service.main import _configure_logging


def test_defaults(monkeypatch):
    for var in ("OFFICIAL_EMAIL", "OPENAI_API_KEY", "PORT", "RATE_LIMIT_RPM"):
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert s.official_email == ""
    assert s.openai_api_key == ""
    assert s.port == 3000
    assert s.rate_limit_rpm == 60
    assert s.max_body_bytes == 65536


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("OFFICIAL_EMAIL", "  someone@example.com ")
    monkeypatch.setenv("OPENAI_API_KEY", " sk-live\n")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("RATE_LIMIT_RPM", "5")
    s = Settings(_env_file=None)
    assert s.official_email == "someone@example.com"
    assert s.openai_api_key == "sk-live"
    assert s.port == 8080
    assert s.rate_limit_rpm == 5


def test_rate_limit_floor(monkeypatch):
    monkeypatch.setenv("RATE_LIMIT_RPM", "0")
    assert Settings(_env_file=None).rate_limit_rpm == 1
    assert Settings(_env_file=None, rate_limit_rpm=-10).rate_limit_rpm == 1


def test_provider_from_settings():
    s = Settings(
        _env_file=None,
        openai_api_key="sk-x",
        openai_model="gpt-mini",
        openai_base_url="https://proxy.local/v1/",
        openai_timeout_seconds=3,
    )
    p = OpenAIAnswerProvider.from_settings(s)
    assert p.api_key == "sk-x"
    assert p.model == "gpt-mini"
    assert p.base_url == "https://proxy.local/v1"
    assert p.timeout == 3


def test_reads_dotenv_file_and_ignores_unknown_keys(tmp_path, monkeypatch):
    for var in ("OFFICIAL_EMAIL", "RATE_LIMIT_RPM"):
        monkeypatch.delenv(var, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "OFFICIAL_EMAIL=dotenv@example.com\n"
        "RATE_LIMIT_RPM=7\n"
        "SOME_OTHER_TOOL_SETTING=1\n"
    )
    s = Settings(_env_file=env_file)
    assert s.official_email == "dotenv@example.com"
    assert s.rate_limit_rpm == 7


def test_json_logging_uses_json_formatter():
    root = logging.getLogger()
    before = list(root.handlers)
    _configure_logging(Settings(_env_file=None, log_format="json"))
    added = [h for h in root.handlers if h not in before]
    try:
        assert len(added) == 1
        assert isinstance(added[0].formatter, JsonFormatter)
    finally:
        for h in added:
            root.removeHandler(h)
