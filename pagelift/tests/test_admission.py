"""Test the lead admission pipeline."""

from __future__ import annotations

import logging
import uuid

from pagelift.security.rate_limit import SlidingWindowLimiter
from pagelift.services.admission import (
    AdmissionOutcome,
    LeadAdmissionGate,
    build_default_gate,
)

SITE_A = uuid.UUID("00000000-0000-0000-0000-00000000000a")
SITE_B = uuid.UUID("00000000-0000-0000-0000-00000000000b")
FIFTEEN_MINUTES_MS = 15 * 60 * 1000


def _fields(**extra):
    return {"email": "lead@example.com", "_hp_website": "", **extra}


def test_clean_submission_is_admitted_with_bot_fields_stripped():
    gate = build_default_gate()
    decision = gate.evaluate("1.2.3.4", SITE_A, _fields(_hp_ts="1000"), now=10_000)

    assert decision.outcome is AdmissionOutcome.ADMITTED
    assert decision.admitted
    assert decision.fields == {"email": "lead@example.com"}
    assert decision.limited_by is None


def test_bot_is_fake_accepted_and_consumes_no_quota():
    gate = LeadAdmissionGate(
        SlidingWindowLimiter(max_requests=1, window_ms=1000),
        SlidingWindowLimiter(max_requests=1, window_ms=1000),
    )

    decision = gate.evaluate("9.9.9.9", SITE_A, _fields(_hp_website="spam"), now=100)
    assert decision.outcome is AdmissionOutcome.FAKE_ACCEPTED
    assert decision.fields == {}
    assert len(gate.ip_limiter) == 0
    assert len(gate.ip_site_limiter) == 0

    assert gate.evaluate("9.9.9.9", SITE_A, _fields(), now=200).admitted


def test_sixth_submission_to_same_site_is_rejected_by_site_policy():
    gate = build_default_gate()
    start = 1_700_000_000_000

    for i in range(5):
        assert gate.evaluate("5.5.5.5", SITE_A, _fields(), now=start + i * 1000).admitted

    decision = gate.evaluate("5.5.5.5", SITE_A, _fields(), now=start + 6000)
    assert decision.outcome is AdmissionOutcome.REJECTED
    assert decision.limited_by == "ip_site"

    # the per-IP policy (10) still has room for another site
    assert gate.evaluate("5.5.5.5", SITE_B, _fields(), now=start + 7000).admitted


def test_ip_policy_applies_across_sites():
    gate = build_default_gate()
    start = 1_700_000_000_000
    sites = [uuid.uuid4() for _ in range(11)]

    for i, site_id in enumerate(sites[:10]):
        assert gate.evaluate("7.7.7.7", site_id, _fields(), now=start + i).admitted

    decision = gate.evaluate("7.7.7.7", sites[10], _fields(), now=start + 10)
    assert decision.outcome is AdmissionOutcome.REJECTED
    assert decision.limited_by == "ip"
    # site limiter never saw the rejected request
    assert f"7.7.7.7:{sites[10]}" not in gate.ip_site_limiter.tracked_keys()

    # a different IP is unaffected
    assert gate.evaluate("8.8.8.8", sites[10], _fields(), now=start + 11).admitted


def test_site_rejection_still_counts_against_ip():
    gate = LeadAdmissionGate(
        SlidingWindowLimiter(max_requests=3, window_ms=1000),
        SlidingWindowLimiter(max_requests=1, window_ms=1000),
    )

    assert gate.evaluate("1.1.1.1", SITE_A, _fields(), now=0).admitted
    assert gate.evaluate("1.1.1.1", SITE_A, _fields(), now=1).limited_by == "ip_site"
    assert gate.evaluate("1.1.1.1", SITE_B, _fields(), now=2).admitted
    assert gate.evaluate("1.1.1.1", SITE_B, _fields(), now=3).limited_by == "ip"


def test_site_window_slides_after_fifteen_minutes():
    gate = build_default_gate()
    start = 1_700_000_000_000

    for i in range(5):
        gate.evaluate("2.2.2.2", SITE_A, _fields(), now=start + i)
    assert not gate.evaluate("2.2.2.2", SITE_A, _fields(), now=start + 10).admitted
    assert gate.evaluate("2.2.2.2", SITE_A, _fields(), now=start + FIFTEEN_MINUTES_MS + 1).admitted


def test_non_admitted_outcomes_are_logged(caplog):
    gate = LeadAdmissionGate(
        SlidingWindowLimiter(max_requests=0, window_ms=1000),
        SlidingWindowLimiter(max_requests=1, window_ms=1000),
    )

    with caplog.at_level(logging.INFO, logger="pagelift.services.admission"):
        gate.evaluate("3.3.3.3", SITE_A, _fields(_hp_website="x"), now=0)
        gate.evaluate("3.3.3.3", SITE_A, _fields(), now=0)

    messages = [r.getMessage() for r in caplog.records]
    assert any("bot submission discarded" in m for m in messages)
    assert any("policy=ip" in m for m in messages)
