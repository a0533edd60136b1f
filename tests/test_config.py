"""Tests for scanscore.config: environment-driven domain parsing settings."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from scanscore import config
from scanscore.utils import url


@pytest.fixture(autouse=True)
def _fresh_extractor(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("SCANSCORE_PSL_URLS", "SCANSCORE_PSL_CACHE_DIR", "SCANSCORE_PSL_PRIVATE_DOMAINS"):
        monkeypatch.delenv(name, raising=False)
    url.reset_extractor()
    yield
    url.reset_extractor()


class TestDomainParsingConfig:
    """Tests for DomainParsingConfig."""

    def test_defaults_offline(self) -> None:
        settings = config.load_domain_config()
        assert settings.suffix_list_urls == []
        assert settings.cache_dir is None
        assert settings.include_private_domains is False
        assert settings.offline is True

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCANSCORE_PSL_URLS", '["https://publicsuffix.org/list/public_suffix_list.dat"]')
        monkeypatch.setenv("SCANSCORE_PSL_CACHE_DIR", "/tmp/psl")
        monkeypatch.setenv("SCANSCORE_PSL_PRIVATE_DOMAINS", "true")
        settings = config.load_domain_config()
        assert settings.suffix_list_urls == ["https://publicsuffix.org/list/public_suffix_list.dat"]
        assert settings.cache_dir == "/tmp/psl"
        assert settings.include_private_domains is True
        assert settings.offline is False

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("https://psl.example/list.dat", ["https://psl.example/list.dat"]),
            ("https://a.example/l.dat, https://b.example/l.dat", ["https://a.example/l.dat", "https://b.example/l.dat"]),
            ('["https://a.example/l.dat"]', ["https://a.example/l.dat"]),
            ("", []),
        ],
    )
    def test_suffix_list_urls_formats(self, monkeypatch: pytest.MonkeyPatch, raw: str, expected: list[str]) -> None:
        monkeypatch.setenv("SCANSCORE_PSL_URLS", raw)
        settings = config.load_domain_config()
        assert settings.suffix_list_urls == expected
        assert settings.offline is (not expected)

    def test_private_domains_change_registrable_domain(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert url.get_registrable_domain("user.github.io") == "github.io"
        monkeypatch.setenv("SCANSCORE_PSL_PRIVATE_DOMAINS", "true")
        url.reset_extractor()
        assert url.get_registrable_domain("user.github.io") == "user.github.io"
