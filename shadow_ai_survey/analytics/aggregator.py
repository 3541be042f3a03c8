"""Aggregate raw survey responses into a structured :class:`AnalyticsResult`."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from shadow_ai_survey.analytics.models import (
    AIUsageSplit,
    AnalyticsResult,
    ApprovalBreakdown,
    DepartmentBreakdown,
    GuidanceGap,
    SensitiveDataExposure,
    TaskUsage,
    ToolUsage,
)
from shadow_ai_survey.analytics.ratios import percent
from shadow_ai_survey.analytics.risk import generate_risk_flags
from shadow_ai_survey.catalog import ToolCatalog, get_default_catalog
from shadow_ai_survey.survey.models import (
    AIUser,
    ApprovalStatus,
    DataEntryFrequency,
    ResponseRecord,
)

logger = logging.getLogger(__name__)

CUSTOM_TOOL_PREFIX = "custom:"

# Department label the response store uses for "not provided"
UNKNOWN_DEPARTMENT = "Unknown"


@dataclass
class _DepartmentTally:
    responses: int = 0
    ai_users: int = 0
    sensitive_data: int = 0
    no_approval: int = 0


def _label(value: str) -> str:
    # Report enum members as their plain string labels
    return value.value if isinstance(value, Enum) else value


def _distinct(values: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(_label(v) for v in values))


def _department_key(department: Optional[str]) -> Optional[str]:
    if department is None:
        return None
    department = _label(department)
    if not department.strip() or department == UNKNOWN_DEPARTMENT:
        return None
    return department


def _tool_usage(ai_users: Sequence[AIUser], catalog: ToolCatalog) -> List[ToolUsage]:
    counts: Counter[str] = Counter()
    for user in ai_users:
        for tool_id in _distinct(user.tools_used):
            counts[tool_id] += 1
        for tool in _distinct(user.custom_tools):
            counts[CUSTOM_TOOL_PREFIX + tool] += 1

    rows = []
    for tool_id, count in counts.items():
        if tool_id.startswith(CUSTOM_TOOL_PREFIX):
            name = tool_id[len(CUSTOM_TOOL_PREFIX):]
        else:
            name = catalog.name_for(tool_id)
        rows.append(
            ToolUsage(
                tool_id=tool_id,
                tool_name=name,
                count=count,
                percentage=percent(count, len(ai_users)),
            )
        )
    rows.sort(key=lambda row: row.count, reverse=True)
    return rows


def _task_usage(ai_users: Sequence[AIUser]) -> List[TaskUsage]:
    counts: Counter[str] = Counter()
    for user in ai_users:
        for task in _distinct(user.tasks_used):
            counts[task] += 1

    rows = [
        TaskUsage(task=task, count=count, percentage=percent(count, len(ai_users)))
        for task, count in counts.items()
    ]
    rows.sort(key=lambda row: row.count, reverse=True)
    return rows


def _count_answer(values: List[Optional[str]], answer: str) -> int:
    return sum(1 for value in values if value == answer)


def _sensitive_data(ai_users: Sequence[AIUser]) -> SensitiveDataExposure:
    answers = [user.enters_sensitive_data for user in ai_users]
    exposure = SensitiveDataExposure(
        regularly=_count_answer(answers, DataEntryFrequency.REGULARLY),
        occasionally=_count_answer(answers, DataEntryFrequency.OCCASIONALLY),
        never=_count_answer(answers, DataEntryFrequency.NEVER),
    )
    exposure.percent_at_risk = percent(
        exposure.regularly + exposure.occasionally, len(ai_users)
    )
    return exposure


def _approval(ai_users: Sequence[AIUser]) -> ApprovalBreakdown:
    answers = [user.has_approval for user in ai_users]
    approval = ApprovalBreakdown(
        approved=_count_answer(answers, ApprovalStatus.YES),
        not_approved=_count_answer(answers, ApprovalStatus.NO),
        unsure=_count_answer(answers, ApprovalStatus.UNSURE),
    )
    approval.percent_unapproved = percent(approval.unapproved, len(ai_users))
    return approval


def _guidance(responses: Sequence[ResponseRecord]) -> GuidanceGap:
    has_guidance = sum(1 for r in responses if r.has_received_guidance)
    no_guidance = len(responses) - has_guidance
    return GuidanceGap(
        has_guidance=has_guidance,
        no_guidance=no_guidance,
        percent_no_guidance=percent(no_guidance, len(responses)),
    )


def _by_department(responses: Sequence[ResponseRecord]) -> List[DepartmentBreakdown]:
    tallies: Dict[str, _DepartmentTally] = {}
    for response in responses:
        key = _department_key(response.department)
        if key is None:
            continue
        tally = tallies.setdefault(key, _DepartmentTally())
        tally.responses += 1
        if isinstance(response, AIUser):
            tally.ai_users += 1
            if response.enters_sensitive_data != DataEntryFrequency.NEVER:
                tally.sensitive_data += 1
            if response.has_approval != ApprovalStatus.YES:
                tally.no_approval += 1

    rows = [
        DepartmentBreakdown(
            department=department,
            responses=tally.responses,
            percent_using_ai=percent(tally.ai_users, tally.responses),
            percent_sensitive_data=percent(tally.sensitive_data, tally.ai_users),
            percent_no_approval=percent(tally.no_approval, tally.ai_users),
        )
        for department, tally in tallies.items()
    ]
    rows.sort(key=lambda row: row.responses, reverse=True)
    return rows


def calculate_analytics(
    responses: Sequence[ResponseRecord],
    *,
    catalog: Optional[ToolCatalog] = None,
) -> AnalyticsResult:
    """Convert one survey's *responses* into :class:`AnalyticsResult`.

    The function is read-only and never raises for well-formed records.
    Answers holding unexpected labels match none of the known categories.
    *catalog* resolves tool ids to display names; it defaults to the
    process-wide catalog.
    """

    responses = list(responses)
    total = len(responses)
    if total == 0:
        return AnalyticsResult()

    if catalog is None:
        catalog = get_default_catalog()

    ai_users = [r for r in responses if isinstance(r, AIUser)]

    uses_ai = AIUsageSplit(
        yes=len(ai_users),
        no=total - len(ai_users),
        percent_yes=percent(len(ai_users), total),
    )
    approval = _approval(ai_users)
    guidance = _guidance(responses)
    by_department = _by_department(responses)

    result = AnalyticsResult(
        total_responses=total,
        uses_ai=uses_ai,
        tool_usage=_tool_usage(ai_users, catalog),
        task_usage=_task_usage(ai_users),
        sensitive_data_exposure=_sensitive_data(ai_users),
        approval_status=approval,
        guidance_gap=guidance,
        by_department=by_department,
        risk_flags=generate_risk_flags(ai_users, approval, guidance, by_department),
    )

    logger.debug(
        "Analytics computed: responses=%d ai_users=%d departments=%d flags=%d",
        total,
        len(ai_users),
        len(by_department),
        len(result.risk_flags),
    )
    return result
