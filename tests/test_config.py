# tests/test_config.py

import pytest
from loguru import logger
from pydantic import ValidationError

from calendrix.bootstrap import build_resolver
from calendrix.config import Settings
from calendrix.core.errors import UnparseableDate
from calendrix.logs import configure_logging, disable_logging
from calendrix.text.parser import parse
from calendrix.zones.resolver import CachingResolver, ZoneInfoResolver


def test_defaults():
    s = Settings()
    assert s.default_zone == "UTC"
    assert s.week_starts_on == 0
    assert s.cache_resolutions is True
    assert s.log_level == "WARNING"


def test_from_env():
    s = Settings.from_env({
        "CALENDRIX_DEFAULT_ZONE": "Europe/Paris",
        "CALENDRIX_WEEK_STARTS_ON": "1",
        "CALENDRIX_CACHE_RESOLUTIONS": "false",
        "CALENDRIX_LOG_LEVEL": "DEBUG",
        "UNRELATED": "x",
    })
    assert s == Settings(default_zone="Europe/Paris", week_starts_on=1, cache_resolutions=False, log_level="DEBUG")


def test_from_env_reads_os_environ(monkeypatch):
    monkeypatch.setenv("CALENDRIX_WEEK_STARTS_ON", "6")
    assert Settings.from_env().week_starts_on == 6


@pytest.mark.parametrize(
    "env",
    [
        {"CALENDRIX_WEEK_STARTS_ON": "7"},
        {"CALENDRIX_WEEK_STARTS_ON": "monday"},
        {"CALENDRIX_LOG_LEVEL": "LOUD"},
    ],
)
def test_invalid_env(env):
    with pytest.raises(ValidationError):
        Settings.from_env(env)


def test_settings_are_frozen():
    with pytest.raises(ValidationError):
        Settings().default_zone = "Asia/Tokyo"


def test_build_resolver():
    cached = build_resolver(Settings())
    plain = build_resolver(Settings(cache_resolutions=False))
    assert isinstance(cached, CachingResolver)
    assert isinstance(plain, ZoneInfoResolver)
    i = parse("2023-07-01T00:00:00Z")
    assert cached.resolve("Europe/Paris", i) == plain.resolve("Europe/Paris", i)


def test_logging_is_silent_until_configured():
    records = []
    sink_id = logger.add(records.append, level="DEBUG")
    try:
        logger.disable("calendrix")
        with pytest.raises(UnparseableDate):
            parse("not a date")
        assert records == []
    finally:
        logger.remove(sink_id)


def test_configure_logging_routes_library_records():
    records = []
    try:
        configure_logging("DEBUG", sink=records.append)
        with pytest.raises(UnparseableDate):
            parse("not a date")
        assert any("unparseable date" in str(r) for r in records)

        # a second call replaces the sink instead of adding another
        more = []
        configure_logging("DEBUG", sink=more.append)
        with pytest.raises(UnparseableDate):
            parse("still not a date")
        assert len([r for r in records if "still" in str(r)]) == 0
        assert any("still" in str(r) for r in more)
    finally:
        disable_logging()
