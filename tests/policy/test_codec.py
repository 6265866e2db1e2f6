"""Tests for the MODE|cats wire format."""

import pytest
from langcat.policy.codec import encode_policy, parse_policy, decode_policy
from langcat.policy.models import Policy, DefaultPolicy, Mode
from langcat.utils.errors import DecodeError


@pytest.fixture
def default_policy():
    return DefaultPolicy(mode=Mode.EXCEPT, cats=["ads"])


class TestEncode:
    """Encoding."""

    def test_encode_sorted_lowercase(self):
        assert encode_policy(Policy(mode=Mode.ONLY, cats={"Sports", "news"})) == "ONLY|news,sports"

    def test_encode_empty_set_keeps_separator(self):
        assert encode_policy(Policy(mode=Mode.ALL)) == "ALL|"


class TestParse:
    """Strict parsing."""

    @pytest.mark.parametrize("policy", [
        Policy(mode=Mode.ALL),
        Policy(mode=Mode.NONE),
        Policy(mode=Mode.ONLY, cats={"news"}),
        Policy(mode=Mode.EXCEPT, cats={"news", "sports", "weather"}),
    ])
    def test_round_trip(self, policy):
        assert parse_policy(encode_policy(policy)).is_equivalent(policy)

    def test_trailing_separator_is_empty_set(self):
        policy = parse_policy("NONE|")

        assert policy.mode == Mode.NONE
        assert policy.cats == set()

    def test_missing_separator_is_bare_mode(self):
        assert parse_policy("ALL").mode == Mode.ALL

    def test_empty_segments_skipped_and_lowercased(self):
        policy = parse_policy("ONLY|News,,SPORTS,")

        assert policy.cats == {"news", "sports"}

    def test_empty_allow_list_normalized(self):
        assert parse_policy("ONLY|").mode == Mode.NONE
        assert parse_policy("EXCEPT|").mode == Mode.ALL

    def test_bytes_accepted(self):
        assert parse_policy(b"ONLY|news").cats == {"news"}

    @pytest.mark.parametrize("raw", ["BOGUS|x,y", "", "|news", 42, None, "all|x", " ONLY|news", "Except|ads"])
    def test_malformed_values_raise(self, raw):
        with pytest.raises(DecodeError):
            parse_policy(raw)


class TestDecode:
    """Tolerant decoding."""

    def test_bogus_mode_yields_default_copy(self, default_policy):
        policy = decode_policy("BOGUS|x,y", default_policy)

        assert policy.mode == Mode.EXCEPT
        assert policy.cats == {"ads"}
        assert isinstance(policy, Policy)

    def test_default_copies_are_independent(self, default_policy):
        first = decode_policy("BOGUS", default_policy)
        second = decode_policy("BOGUS", default_policy)
        first.cats.add("news")

        assert second.cats == {"ads"}
        assert default_policy.cats == frozenset({"ads"})

    def test_valid_value_decoded(self, default_policy):
        assert decode_policy("NONE|", default_policy).mode == Mode.NONE

    def test_lowercase_mode_yields_default(self, default_policy):
        policy = decode_policy("all|x", default_policy)

        assert policy.mode == Mode.EXCEPT
        assert policy.cats == {"ads"}
