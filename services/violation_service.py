"""
Violation breakdown service.

Per-team and per-reason counts of detractors and neutrals for the
breakdown tables. Promoters never count as violations.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Tuple

import structlog

from config.calendar import UNKNOWN_TEAM
from models.feedback import FeedbackRecord, ScoreCategory, as_records
from models.trends import ReasonViolation, TeamViolation

logger = structlog.get_logger(__name__)

VIOLATION_CATEGORIES = (ScoreCategory.DETRACTOR, ScoreCategory.NEUTRAL)


def get_team_violations(records: Iterable[FeedbackRecord]) -> List[TeamViolation]:
    """
    Detractor/neutral counts per (team name, team company).

    Missing names or companies become "Unknown". Sorted by total
    descending; ids are 1-based positions in that order.
    """
    counts: Dict[Tuple[str, str], List[int]] = {}

    for record in as_records(records):
        category = record.category
        if category not in VIOLATION_CATEGORIES:
            continue

        key = (record.team_name or UNKNOWN_TEAM, record.team_company or UNKNOWN_TEAM)
        slot = counts.setdefault(key, [0, 0])
        if category == ScoreCategory.DETRACTOR:
            slot[0] += 1
        else:
            slot[1] += 1

    ordered = sorted(counts.items(), key=lambda item: -(item[1][0] + item[1][1]))

    violations = [
        TeamViolation(
            id=position,
            team_name=team_name,
            team_company=team_company,
            detractors=detractors,
            neutrals=neutrals,
            total=detractors + neutrals
        )
        for position, ((team_name, team_company), (detractors, neutrals))
        in enumerate(ordered, start=1)
    ]

    logger.debug("team_violations_calculated", teams=len(violations))

    return violations


def get_reason_violations(records: Iterable[FeedbackRecord]) -> List[ReasonViolation]:
    """
    Violation totals per reason with their share of all violations.

    Records without a reason are skipped. Shares are rounded to two
    decimals; sorted by total descending.
    """
    totals: Dict[str, int] = {}
    for record in as_records(records):
        if record.category not in VIOLATION_CATEGORIES or not record.reason:
            continue
        totals[record.reason] = totals.get(record.reason, 0) + 1

    overall = sum(totals.values())

    violations = []
    for reason, total in sorted(totals.items(), key=lambda item: -item[1]):
        share = Decimal("0")
        if overall > 0:
            share = (Decimal(total) * 100 / Decimal(overall)).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
        violations.append(ReasonViolation(reason=reason, total=total, percentage=float(share)))

    logger.debug("reason_violations_calculated", reasons=len(violations), total=overall)

    return violations
