"""
Continuity signal.

An affirmative "nothing changed" statement, asserted only when at least
one earlier run was compared and the diff produced no change events.
"""

from __future__ import annotations

from typing import Optional, Sequence

from apidrift.models import ChangeEvent, ContinuitySignal


def build_continuity_signal(
    compared_runs: int,
    changes: Sequence[ChangeEvent],
    total_findings: int,
) -> Optional[ContinuitySignal]:
    if compared_runs == 0:
        return None
    if changes:
        return None
    return ContinuitySignal(
        compared_runs=compared_runs,
        unchanged_findings=max(0, total_findings - len(changes)),
        message=f"No changes detected across the last {compared_runs} runs.",
    )
