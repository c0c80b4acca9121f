"""
Change detector.

Diffs the findings of two runs scope by scope:

- **finding_appeared**: scope only in the current run.
- **finding_disappeared**: scope only in the previous run.
- **severity_shift**: severity labels differ.
- **frequency_shift**: observed percentage moved by more than 10 points.
- **confidence_shift**: sample count moved by more than 50% of the
  previous count.

The three shift checks are independent, so one scope can yield several
events in one diff. Events carry partial snapshots and no interpretation;
there is no "regression" or "improvement" here.

Usage::

    from apidrift.diff.change_detector import detect_changes

    changes = detect_changes(previous.report, current_report)
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from apidrift.diff.matcher import create_scope, group_by_scope
from apidrift.models import ChangeEvent, ChangeSnapshot, DriftFinding, DriftReport
from apidrift.types import ChangeType

logger = logging.getLogger(__name__)

FREQUENCY_SHIFT_THRESHOLD = 10.0
CONFIDENCE_SHIFT_THRESHOLD = 50.0

IdFactory = Callable[[], str]


def new_id() -> str:
    return str(uuid.uuid4())


def create_snapshot(finding: DriftFinding) -> ChangeSnapshot:
    return ChangeSnapshot(
        severity=finding.severity,
        frequency_percentage=finding.observed.percentage,
        sample_count=finding.confidence.sample_count,
        confidence_inputs=finding.confidence,
    )


def _shift_events(
    previous: DriftFinding,
    current: DriftFinding,
    id_factory: IdFactory,
) -> list[ChangeEvent]:
    events: list[ChangeEvent] = []
    scope = create_scope(current)

    if previous.severity != current.severity:
        events.append(
            ChangeEvent(
                change_id=id_factory(),
                change_type=ChangeType.SEVERITY_SHIFT,
                scope=scope,
                previous=ChangeSnapshot(severity=previous.severity),
                current=ChangeSnapshot(severity=current.severity),
            )
        )

    previous_freq = previous.observed.percentage or 0.0
    current_freq = current.observed.percentage or 0.0
    if abs(current_freq - previous_freq) > FREQUENCY_SHIFT_THRESHOLD:
        events.append(
            ChangeEvent(
                change_id=id_factory(),
                change_type=ChangeType.FREQUENCY_SHIFT,
                scope=scope,
                previous=ChangeSnapshot(frequency_percentage=previous_freq),
                current=ChangeSnapshot(frequency_percentage=current_freq),
            )
        )

    previous_count = previous.confidence.sample_count
    current_count = current.confidence.sample_count
    # No baseline, no computable shift
    if previous_count > 0:
        change_pct = abs(current_count - previous_count) / previous_count * 100
        if change_pct > CONFIDENCE_SHIFT_THRESHOLD:
            events.append(
                ChangeEvent(
                    change_id=id_factory(),
                    change_type=ChangeType.CONFIDENCE_SHIFT,
                    scope=scope,
                    previous=ChangeSnapshot(
                        sample_count=previous_count,
                        confidence_inputs=previous.confidence,
                    ),
                    current=ChangeSnapshot(
                        sample_count=current_count,
                        confidence_inputs=current.confidence,
                    ),
                )
            )

    return events


def detect_changes(
    previous_report: DriftReport,
    current_report: DriftReport,
    id_factory: IdFactory = new_id,
) -> list[ChangeEvent]:
    """Change events between two runs, in previous-then-new scope order.

    Args:
        previous_report: Single-run report of the earlier run.
        current_report: Single-run report of this run.
        id_factory: Produces opaque unique change ids.
    """
    previous_map = group_by_scope(previous_report.findings)
    current_map = group_by_scope(current_report.findings)

    changes: list[ChangeEvent] = []
    for key in dict.fromkeys([*previous_map, *current_map]):
        previous = previous_map.get(key)
        current = current_map.get(key)

        if previous is None and current is not None:
            changes.append(
                ChangeEvent(
                    change_id=id_factory(),
                    change_type=ChangeType.FINDING_APPEARED,
                    scope=create_scope(current),
                    current=create_snapshot(current),
                )
            )
        elif previous is not None and current is None:
            changes.append(
                ChangeEvent(
                    change_id=id_factory(),
                    change_type=ChangeType.FINDING_DISAPPEARED,
                    scope=create_scope(previous),
                    previous=create_snapshot(previous),
                )
            )
        elif previous is not None and current is not None:
            changes.extend(_shift_events(previous, current, id_factory))

    logger.debug(
        "Detected %d changes across %d scopes",
        len(changes),
        len(set(previous_map) | set(current_map)),
    )
    return changes
