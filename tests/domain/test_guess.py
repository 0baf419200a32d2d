"""Tests for tag guessing from URLs."""

from __future__ import annotations

import pytest

from passhash.domain.guess import GuessMode, guess_tag, url_host
from passhash.domain.suffix import SuffixRules


@pytest.fixture
def rules() -> SuffixRules:
    return SuffixRules.default()


class TestUrlHost:
    def test_plain(self) -> None:
        assert url_host("https://Example.COM/path") == ("example.com", "example.com")

    def test_default_port_dropped(self) -> None:
        assert url_host("https://example.com:443/") == ("example.com", "example.com")

    def test_explicit_port_kept(self) -> None:
        assert url_host("http://localhost:8080/x") == ("localhost", "localhost:8080")

    def test_userinfo_dropped(self) -> None:
        assert url_host("https://user:pw@example.com/") == ("example.com", "example.com")

    def test_ipv6(self) -> None:
        assert url_host("http://[::1]:8000/") == ("::1", "[::1]:8000")

    def test_no_host(self) -> None:
        assert url_host("about:blank") == ("", "")

    def test_idn_host_is_punycode(self) -> None:
        assert url_host("https://Bücher.de/login") == ("xn--bcher-kva.de", "xn--bcher-kva.de")

    def test_idn_host_keeps_port(self) -> None:
        assert url_host("http://bücher.de:8080/") == (
            "xn--bcher-kva.de",
            "xn--bcher-kva.de:8080",
        )

    def test_unencodable_idn_host(self) -> None:
        assert url_host(f"https://{'ü' * 70}.de/") == ("", "")

    def test_malformed(self) -> None:
        assert url_host("http://[::1/") == ("", "")


class TestGuessTag:
    def test_domain_mode(self, rules: SuffixRules) -> None:
        assert guess_tag("https://www.example.co.uk/login", GuessMode.DOMAIN, rules) == (
            "example.co.uk"
        )

    def test_name_mode_takes_last_prefix_label(self, rules: SuffixRules) -> None:
        """The registrable name, not the deepest subdomain."""
        assert guess_tag("https://mail.google.com/", GuessMode.NAME, rules) == "google"

    def test_full_mode(self, rules: SuffixRules) -> None:
        assert guess_tag("https://mail.google.com/inbox", GuessMode.FULL, rules) == (
            "mail.google.com"
        )

    def test_full_mode_keeps_port(self, rules: SuffixRules) -> None:
        assert guess_tag("http://localhost:3000/", "full", rules) == "localhost:3000"

    def test_no_mode(self, rules: SuffixRules) -> None:
        assert guess_tag("https://example.com/", GuessMode.NO, rules) is None

    def test_accepts_string_mode(self, rules: SuffixRules) -> None:
        assert guess_tag("https://example.com/", "domain", rules) == "example.com"

    def test_unknown_suffix_name_falls_back_to_first_label(self, rules: SuffixRules) -> None:
        assert guess_tag("http://intranet.corp/", GuessMode.NAME, rules) == "intranet"

    def test_unknown_suffix_domain_uses_whole_host(self, rules: SuffixRules) -> None:
        assert guess_tag("http://intranet.corp/", GuessMode.DOMAIN, rules) == "intranet.corp"

    def test_single_label_host(self, rules: SuffixRules) -> None:
        assert guess_tag("http://localhost/", GuessMode.NAME, rules) == "localhost"
        assert guess_tag("http://localhost/", GuessMode.DOMAIN, rules) == "localhost"

    def test_domain_mode_ignores_port(self, rules: SuffixRules) -> None:
        assert guess_tag("https://app.example.com:8443/", "domain", rules) == "example.com"

    @pytest.mark.parametrize("mode", list(GuessMode))
    def test_no_host_guesses_nothing(self, rules: SuffixRules, mode: GuessMode) -> None:
        assert guess_tag("about:blank", mode, rules) is None

    def test_invalid_mode(self, rules: SuffixRules) -> None:
        with pytest.raises(ValueError):
            guess_tag("https://example.com/", "bogus", rules)

    def test_deterministic(self, rules: SuffixRules) -> None:
        url = "https://accounts.example.com.au/signin"
        first = guess_tag(url, "domain", rules)
        assert first == guess_tag(url, "domain", rules) == "example.com.au"

    @pytest.mark.parametrize(
        ("url", "mode", "expected"),
        [
            ("https://Bücher.de/login", GuessMode.FULL, "xn--bcher-kva.de"),
            ("https://www.bücher.de/", GuessMode.DOMAIN, "xn--bcher-kva.de"),
            ("https://www.bücher.de/", GuessMode.NAME, "xn--bcher-kva"),
        ],
    )
    def test_idn_hosts_guess_ascii_tags(
        self, rules: SuffixRules, url: str, mode: GuessMode, expected: str
    ) -> None:
        assert guess_tag(url, mode, rules) == expected
