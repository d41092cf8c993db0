"""Admission service - bot check then per-IP and per-IP-per-site limits."""

from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass, field
from typing import Mapping

from ..security.bot_detection import FieldValue, is_bot_submission, strip_bot_fields
from ..security.rate_limit import IP_POLICY, IP_SITE_POLICY, SlidingWindowLimiter

log = logging.getLogger(__name__)


class AdmissionOutcome(str, enum.Enum):
    ADMITTED = "admitted"
    FAKE_ACCEPTED = "fake_accepted"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class AdmissionDecision:
    outcome: AdmissionOutcome
    fields: dict[str, FieldValue] = field(default_factory=dict)
    limited_by: str | None = None

    @property
    def admitted(self) -> bool:
        return self.outcome is AdmissionOutcome.ADMITTED


class LeadAdmissionGate:
    """Decides whether a public lead submission may reach persistence.

    Bots are answered with a fake success so they learn nothing. Clean
    submissions must pass the per-IP limiter and then the limiter keyed on
    ``"<ip>:<site_id>"``. Both limiters are long-lived and shared by every
    request the gate sees.
    """

    def __init__(
        self,
        ip_limiter: SlidingWindowLimiter,
        ip_site_limiter: SlidingWindowLimiter,
    ) -> None:
        self.ip_limiter = ip_limiter
        self.ip_site_limiter = ip_site_limiter

    def evaluate(
        self,
        ip: str,
        site_id: uuid.UUID | str,
        fields: Mapping[str, FieldValue],
        now: float | None = None,
    ) -> AdmissionDecision:
        if is_bot_submission(fields, now=now):
            log.info("bot submission discarded ip=%s site=%s", ip, site_id)
            return AdmissionDecision(AdmissionOutcome.FAKE_ACCEPTED)

        cleaned = strip_bot_fields(fields)

        if not self.ip_limiter.check(ip, now=now).allowed:
            log.info("lead rate limited ip=%s site=%s policy=ip", ip, site_id)
            return AdmissionDecision(AdmissionOutcome.REJECTED, cleaned, limited_by="ip")

        if not self.ip_site_limiter.check(f"{ip}:{site_id}", now=now).allowed:
            log.info("lead rate limited ip=%s site=%s policy=ip_site", ip, site_id)
            return AdmissionDecision(AdmissionOutcome.REJECTED, cleaned, limited_by="ip_site")

        return AdmissionDecision(AdmissionOutcome.ADMITTED, cleaned)


def build_default_gate(**limiter_kwargs) -> LeadAdmissionGate:
    """Gate wired with the standard 10-per-IP and 5-per-IP-per-site policies."""
    return LeadAdmissionGate(
        SlidingWindowLimiter.from_policy(IP_POLICY, **limiter_kwargs),
        SlidingWindowLimiter.from_policy(IP_SITE_POLICY, **limiter_kwargs),
    )
