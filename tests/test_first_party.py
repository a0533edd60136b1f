"""Tests for scanscore.analysis.first_party: first-party domain classification."""

from __future__ import annotations

import pytest

from scanscore.analysis.first_party import is_first_party
from scanscore.data import loader


class TestIsFirstParty:
    """Tests for is_first_party()."""

    @pytest.mark.parametrize(
        ("domain", "root"),
        [
            ("example.com", "example.com"),
            ("www.example.com", "example.com"),
            ("static.cdn.example.com", "example.com"),
            ("EXAMPLE.com.", "example.com"),
            ("shop.example.co.uk", "example.co.uk"),
            ("github.githubassets.com", "github.com"),
            ("githubassets.com", "github.com"),
            ("avatars.githubusercontent.com", "github.com"),
            ("fonts.gstatic.com", "google.com"),
            ("i.ytimg.com", "youtube.com"),
        ],
    )
    def test_first_party(self, domain: str, root: str) -> None:
        assert is_first_party(domain, root) is True

    @pytest.mark.parametrize(
        ("domain", "root"),
        [
            ("google-analytics.com", "example.com"),
            ("example.com.evil.net", "example.com"),
            ("notexample.com", "example.com"),
            ("other.co.uk", "example.co.uk"),
            ("githubassets.com", "gitlab.com"),
            ("fakegithubassets.com", "github.com"),
        ],
    )
    def test_third_party(self, domain: str, root: str) -> None:
        assert is_first_party(domain, root) is False

    def test_root_subdomain_uses_registrable_root(self) -> None:
        assert is_first_party("github.githubassets.com", "www.github.com") is True

    @pytest.mark.parametrize("root", [None, "", "localhost"])
    def test_unparseable_root_is_never_first_party(self, root: str | None) -> None:
        assert is_first_party("localhost", root) is False

    def test_empty_domain(self) -> None:
        assert is_first_party("", "example.com") is False


class TestFirstPartyGroups:
    """Tests for the bundled first-party table."""

    def test_loaded_and_keyed_by_root(self) -> None:
        groups = loader.get_first_party_groups()
        assert "github.com" in groups
        assert "githubassets.com" in groups["github.com"].first_party

    def test_cached(self) -> None:
        assert loader.get_first_party_groups() is loader.get_first_party_groups()

    def test_missing_file_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            loader._load_json("does-not-exist.json")
