"""Heuristic risk flags raised from aggregate survey analytics."""

from __future__ import annotations

import logging
from typing import List, Sequence

from shadow_ai_survey.analytics.models import (
    ApprovalBreakdown,
    DepartmentBreakdown,
    GuidanceGap,
    RiskFlag,
    Severity,
)
from shadow_ai_survey.survey.models import AIUser, ApprovalStatus, DataEntryFrequency

logger = logging.getLogger(__name__)

# Business thresholds (percent, strictly greater than)
NO_GUIDANCE_THRESHOLD = 50
UNAPPROVED_THRESHOLD = 30
DEPARTMENT_EXPOSURE_THRESHOLD = 50


def is_sensitive_unapproved(user: AIUser) -> bool:
    """True when *user* enters sensitive data without a confirmed approval."""
    return (
        user.enters_sensitive_data != DataEntryFrequency.NEVER
        and user.has_approval != ApprovalStatus.YES
    )


def _sensitive_unapproved_message(count: int) -> str:
    if count == 1:
        return "1 employee enters sensitive data into unapproved tools"
    return f"{count} employees enter sensitive data into unapproved tools"


def generate_risk_flags(
    ai_users: Sequence[AIUser],
    approval: ApprovalBreakdown,
    guidance: GuidanceGap,
    by_department: Sequence[DepartmentBreakdown],
) -> List[RiskFlag]:
    """Return risk flags ordered by severity.

    Flags of equal severity keep the order in which they are raised:
    sensitive data in unapproved tools, guidance gap, missing approval, then
    one flag per exposed department in *by_department* order.
    """

    flags: List[RiskFlag] = []

    sensitive_unapproved = sum(1 for user in ai_users if is_sensitive_unapproved(user))
    if sensitive_unapproved > 0:
        flags.append(
            RiskFlag(
                severity=Severity.HIGH,
                message=_sensitive_unapproved_message(sensitive_unapproved),
                count=sensitive_unapproved,
            )
        )

    if guidance.percent_no_guidance > NO_GUIDANCE_THRESHOLD:
        flags.append(
            RiskFlag(
                severity=Severity.HIGH,
                message=(
                    f"{guidance.percent_no_guidance}% of employees have not "
                    "received AI guidance"
                ),
                count=guidance.no_guidance,
            )
        )

    if approval.percent_unapproved > UNAPPROVED_THRESHOLD:
        flags.append(
            RiskFlag(
                severity=Severity.MEDIUM,
                message=(
                    f"{approval.percent_unapproved}% of AI users lack "
                    "manager/IT approval"
                ),
                count=approval.unapproved,
            )
        )

    for dept in by_department:
        if (
            dept.percent_sensitive_data > DEPARTMENT_EXPOSURE_THRESHOLD
            and dept.percent_no_approval > DEPARTMENT_EXPOSURE_THRESHOLD
        ):
            flags.append(
                RiskFlag(
                    severity=Severity.HIGH,
                    message=(
                        f"{dept.department} has high shadow AI exposure "
                        f"({dept.percent_sensitive_data}% sensitive data, "
                        f"{dept.percent_no_approval}% unapproved)"
                    ),
                    count=dept.responses,
                )
            )

    if flags:
        logger.debug("Raised %d risk flag(s)", len(flags))

    # Stable sort: equal severities keep generation order
    return sorted(flags, key=lambda flag: flag.severity.rank)
