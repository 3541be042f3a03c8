"""Data structures returned by the analytics engine.

Every ``to_dict`` emits the camelCase keys the dashboard and export layers
read, so the result can be handed to ``json.dumps`` as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Severity(str, Enum):
    """Risk flag severity, ordered most to least urgent."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.HIGH: 0, Severity.MEDIUM: 1, Severity.LOW: 2}


@dataclass(slots=True)
class AIUsageSplit:
    yes: int = 0
    no: int = 0
    percent_yes: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"yes": self.yes, "no": self.no, "percentYes": self.percent_yes}


@dataclass(slots=True)
class ToolUsage:
    tool_id: str
    tool_name: str
    count: int
    percentage: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "toolId": self.tool_id,
            "toolName": self.tool_name,
            "count": self.count,
            "percentage": self.percentage,
        }


@dataclass(slots=True)
class TaskUsage:
    task: str
    count: int
    percentage: int

    def to_dict(self) -> Dict[str, Any]:
        return {"task": self.task, "count": self.count, "percentage": self.percentage}


@dataclass(slots=True)
class SensitiveDataExposure:
    """AI users by how often they enter sensitive data."""

    regularly: int = 0
    occasionally: int = 0
    never: int = 0
    percent_at_risk: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "regularly": self.regularly,
            "occasionally": self.occasionally,
            "never": self.never,
            "percentAtRisk": self.percent_at_risk,
        }


@dataclass(slots=True)
class ApprovalBreakdown:
    """AI users by whether their tool use is approved."""

    approved: int = 0
    not_approved: int = 0
    unsure: int = 0
    percent_unapproved: int = 0

    @property
    def unapproved(self) -> int:
        """Respondents answering *No* or *Unsure*."""
        return self.not_approved + self.unsure

    def to_dict(self) -> Dict[str, Any]:
        return {
            "approved": self.approved,
            "notApproved": self.not_approved,
            "unsure": self.unsure,
            "percentUnapproved": self.percent_unapproved,
        }


@dataclass(slots=True)
class GuidanceGap:
    """All respondents by whether they received company AI guidance."""

    has_guidance: int = 0
    no_guidance: int = 0
    percent_no_guidance: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasGuidance": self.has_guidance,
            "noGuidance": self.no_guidance,
            "percentNoGuidance": self.percent_no_guidance,
        }


@dataclass(slots=True)
class DepartmentBreakdown:
    department: str
    responses: int
    percent_using_ai: int
    percent_sensitive_data: int
    percent_no_approval: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "department": self.department,
            "responses": self.responses,
            "percentUsingAI": self.percent_using_ai,
            "percentSensitiveData": self.percent_sensitive_data,
            "percentNoApproval": self.percent_no_approval,
        }


@dataclass(slots=True)
class RiskFlag:
    """Heuristic warning derived from aggregate thresholds."""

    severity: Severity
    message: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "count": self.count,
        }


@dataclass(slots=True)
class AnalyticsResult:
    """Aggregate analytics for one survey."""

    total_responses: int = 0
    uses_ai: AIUsageSplit = field(default_factory=AIUsageSplit)
    tool_usage: List[ToolUsage] = field(default_factory=list)
    task_usage: List[TaskUsage] = field(default_factory=list)
    sensitive_data_exposure: SensitiveDataExposure = field(
        default_factory=SensitiveDataExposure
    )
    approval_status: ApprovalBreakdown = field(default_factory=ApprovalBreakdown)
    guidance_gap: GuidanceGap = field(default_factory=GuidanceGap)
    by_department: List[DepartmentBreakdown] = field(default_factory=list)
    risk_flags: List[RiskFlag] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – simple helper
        """Return a *plain* ``dict`` (recursively) ready for JSON encoding."""
        return {
            "totalResponses": self.total_responses,
            "usesAI": self.uses_ai.to_dict(),
            "toolUsage": [row.to_dict() for row in self.tool_usage],
            "taskUsage": [row.to_dict() for row in self.task_usage],
            "sensitiveDataExposure": self.sensitive_data_exposure.to_dict(),
            "approvalStatus": self.approval_status.to_dict(),
            "guidanceGap": self.guidance_gap.to_dict(),
            "byDepartment": [row.to_dict() for row in self.by_department],
            "riskFlags": [flag.to_dict() for flag in self.risk_flags],
        }

    # Alias for convenience (e.g. response serializers)
    __call__ = to_dict
