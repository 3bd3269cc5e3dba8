import logging

from farm_bot.config import load_settings
from farm_bot.logging_config import setup_logging


def test_load_settings(monkeypatch):
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "abc123")
    monkeypatch.setenv("DISCORD_APPLICATION_ID", "1435945120766890044")
    for name in (
        "FARM_AUTO_FINALIZE",
        "FARM_AUTO_REOPEN",
        "FARM_ORGANIZER_ROLES",
        "FARM_CATEGORY_NAME",
    ):
        monkeypatch.delenv(name, raising=False)
    s = load_settings()
    assert s.token == "abc123"
    assert s.application_id == 1435945120766890044
    assert s.category_name == "active farms"
    assert s.organizer_roles == ("farm organizer", "farm organiser")
    assert s.policy().auto_finalize_on_full is True
    assert s.policy().auto_reopen_on_under_capacity is True

    # empty token environment
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "")
    s2 = load_settings()
    assert s2.token == ""


def test_policy_toggles(monkeypatch):
    monkeypatch.setenv("FARM_AUTO_FINALIZE", "off")
    monkeypatch.setenv("FARM_AUTO_REOPEN", "0")
    monkeypatch.setenv("FARM_ORGANIZER_ROLES", "Raid Lead, Host ")
    monkeypatch.setenv("FARM_PING_BATCH_SIZE", "5")
    s = load_settings()
    policy = s.policy()
    assert policy.auto_finalize_on_full is False
    assert policy.auto_reopen_on_under_capacity is False
    assert policy.ping_batch_size == 5
    assert s.organizer_roles == ("raid lead", "host")


def test_setup_logging_idempotent():
    logger1 = setup_logging(logging.DEBUG)
    logger2 = setup_logging(logging.DEBUG)
    assert logger1 is logger2
    assert logger1.handlers  # at least one handler installed
