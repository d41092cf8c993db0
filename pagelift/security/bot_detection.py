"""Honeypot and submit-timing checks for public form submissions.

The public page renders two extra inputs alongside the lead form:

* ``_hp_website`` - hidden from people, left empty unless a bot fills it.
* ``_hp_ts`` - the epoch-millisecond time the form was rendered.

Both names are shared with ``templates/public/page.html``.
"""

from __future__ import annotations

import math
import time
from typing import Mapping, Union

HONEYPOT_FIELD = "_hp_website"
RENDERED_AT_FIELD = "_hp_ts"
BOT_FIELDS = frozenset({HONEYPOT_FIELD, RENDERED_AT_FIELD})

MIN_SUBMISSION_TIME_MS = 2000

FieldValue = Union[str, bool, int, float]


def _honeypot_filled(value: FieldValue | None) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def _parse_rendered_at(value: FieldValue | None) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(parsed) or parsed <= 0:
        return None
    return parsed


def is_bot_submission(
    fields: Mapping[str, FieldValue], now: float | None = None
) -> bool:
    """Return ``True`` when the honeypot is filled or the form came back too fast.

    A missing or unparseable render timestamp is not held against the sender.
    """
    if _honeypot_filled(fields.get(HONEYPOT_FIELD)):
        return True

    rendered_at = _parse_rendered_at(fields.get(RENDERED_AT_FIELD))
    if rendered_at is None:
        return False
    if now is None:
        now = time.time() * 1000
    return now - rendered_at < MIN_SUBMISSION_TIME_MS


def strip_bot_fields(fields: Mapping[str, FieldValue]) -> dict[str, FieldValue]:
    """Return a copy of ``fields`` without the honeypot and timestamp inputs."""
    return {k: v for k, v in fields.items() if k not in BOT_FIELDS}
