"""Test honeypot and timing bot detection."""

from __future__ import annotations

import pytest

from pagelift.security.bot_detection import (
    HONEYPOT_FIELD,
    MIN_SUBMISSION_TIME_MS,
    RENDERED_AT_FIELD,
    is_bot_submission,
    strip_bot_fields,
)


def test_reserved_field_names_match_public_form():
    assert HONEYPOT_FIELD == "_hp_website"
    assert RENDERED_AT_FIELD == "_hp_ts"
    assert MIN_SUBMISSION_TIME_MS == 2000


def test_empty_honeypot_is_not_a_bot():
    assert is_bot_submission({"email": "a@b.com", "_hp_website": ""}) is False


def test_filled_honeypot_is_a_bot():
    assert is_bot_submission({"email": "a@b.com", "_hp_website": "http://spam"}) is True


@pytest.mark.parametrize("ts", [None, "", "abc", 1, "999999999999999"])
def test_honeypot_true_wins_regardless_of_timing(ts):
    fields = {"email": "a@b.com", "_hp_website": True}
    if ts is not None:
        fields["_hp_ts"] = ts
    assert is_bot_submission(fields, now=10_000_000) is True


def test_whitespace_and_false_honeypot_are_empty():
    assert is_bot_submission({"_hp_website": "   "}) is False
    assert is_bot_submission({"_hp_website": False}) is False


def test_fast_submission_is_a_bot():
    fields = {"email": "a@b.com", "_hp_ts": 1000}
    assert is_bot_submission(fields, now=2500) is True
    assert is_bot_submission(fields, now=3500) is False


def test_timing_threshold_edges():
    rendered = 1_700_000_000_000
    fields = {"_hp_ts": str(rendered)}
    assert is_bot_submission(fields, now=rendered + 1999) is True
    assert is_bot_submission(fields, now=rendered + 2000) is False
    assert is_bot_submission(fields, now=rendered + 2001) is False


@pytest.mark.parametrize(
    "ts", ["", "not-a-number", "0", "-5", "nan", "inf", True, False, 10**400]
)
def test_malformed_timestamp_is_innocent(ts):
    assert is_bot_submission({"email": "a@b.com", "_hp_ts": ts}, now=100) is False


def test_no_signal_fields_is_innocent():
    assert is_bot_submission({"email": "a@b.com"}) is False
    assert is_bot_submission({}) is False


def test_uses_wall_clock_by_default(monkeypatch):
    monkeypatch.setattr("pagelift.security.bot_detection.time.time", lambda: 2.5)
    assert is_bot_submission({"_hp_ts": "1000"}) is True
    monkeypatch.setattr("pagelift.security.bot_detection.time.time", lambda: 3.5)
    assert is_bot_submission({"_hp_ts": "1000"}) is False


def test_strip_removes_reserved_fields_without_mutating():
    fields = {"email": "a@b.com", "_hp_website": "", "name": "Ann", "_hp_ts": "123"}
    stripped = strip_bot_fields(fields)

    assert stripped == {"email": "a@b.com", "name": "Ann"}
    assert list(stripped) == ["email", "name"]
    assert "_hp_website" in fields and "_hp_ts" in fields
    assert stripped is not fields


def test_strip_is_idempotent():
    fields = {"_hp_ts": "1", "email": "a@b.com", "_hp_website": "x", "consent": True}
    once = strip_bot_fields(fields)
    assert strip_bot_fields(once) == once
    assert "_hp_website" not in once and "_hp_ts" not in once
