"""Survey answer enumerations and response record variants."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple, Union

from shadow_ai_survey.exceptions import ResponseFormatError

logger = logging.getLogger(__name__)


class Department(str, Enum):
    """Department options offered on the survey form."""

    MARKETING = "Marketing"
    HR = "HR"
    IT = "IT"
    FINANCE = "Finance"
    OPERATIONS = "Operations"
    LEGAL = "Legal"
    SALES = "Sales"
    CUSTOMER_SERVICE = "Customer Service"
    ENGINEERING = "Engineering"
    OTHER = "Other"


class TaskType(str, Enum):
    """Closed list of task categories respondents use AI for."""

    WRITING_EMAILS = "Writing emails/documents"
    CODING = "Coding/development"
    DATA_ANALYSIS = "Data analysis/research"
    DESIGN_CREATIVE = "Design/creative work"
    CUSTOMER_SERVICE = "Customer service interactions"
    HR_RECRUITMENT = "HR/recruitment tasks"
    MARKETING_CONTENT = "Marketing content creation"
    MEETING_NOTES = "Meeting notes/summaries"
    TRANSLATION = "Translation"
    OTHER = "Other"


class SubscriptionType(str, Enum):
    FREE_ONLY = "Free only"
    PAID_PERSONAL = "Paid (personal subscription)"
    PAID_COMPANY = "Paid (company subscription)"
    BOTH = "Both free and paid"


class DataEntryFrequency(str, Enum):
    """How often a respondent enters sensitive data into AI tools."""

    REGULARLY = "Yes, regularly"
    OCCASIONALLY = "Occasionally"
    NEVER = "No, never"


class ApprovalStatus(str, Enum):
    """Whether the respondent's AI use is approved by a manager or IT."""

    YES = "Yes"
    NO = "No"
    UNSURE = "Unsure"


@dataclass(frozen=True)
class NonUser:
    """Response from someone who does not use AI tools."""

    has_received_guidance: bool
    department: Optional[str] = None

    @property
    def uses_ai(self) -> bool:  # noqa: D401 – property
        return False


@dataclass(frozen=True)
class AIUser:
    """Response from someone who uses AI tools.

    The categorical answers are kept as the raw submitted strings rather than
    coerced into enums: the enums subclass ``str`` so equality checks against
    them work, and an unexpected label simply matches no known value.
    """

    has_received_guidance: bool
    department: Optional[str] = None
    tools_used: Tuple[str, ...] = field(default_factory=tuple)
    custom_tools: Tuple[str, ...] = field(default_factory=tuple)
    tasks_used: Tuple[str, ...] = field(default_factory=tuple)
    subscription_type: Optional[str] = None
    enters_sensitive_data: Optional[str] = None
    has_approval: Optional[str] = None

    @property
    def uses_ai(self) -> bool:  # noqa: D401 – property
        return True


ResponseRecord = Union[NonUser, AIUser]


# ---------------------------------------------------------------------------
# Parsing stored rows
# ---------------------------------------------------------------------------


def _str_tuple(row: Mapping, key: str) -> Tuple[str, ...]:
    value = row.get(key)
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ResponseFormatError(
            f"Field {key} must be a list, got {type(value).__name__}"
        )
    return tuple(str(item) for item in value if item is not None and item != "")


def _flag(row: Mapping, key: str) -> bool:
    value = row.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ResponseFormatError(
            f"Field {key} must be a boolean, got {type(value).__name__}"
        )
    return value


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def parse_response(row: Mapping) -> ResponseRecord:
    """Build a record variant from a stored response row.

    *row* uses the camelCase keys of the response store (``usesAI``,
    ``toolsUsed``, ``hasApproval`` …).  Conditional answers on a row whose
    ``usesAI`` is false are ignored.
    """

    if not isinstance(row, Mapping):
        raise ResponseFormatError(
            f"Response row must be a mapping, got {type(row).__name__}"
        )

    guidance = _flag(row, "hasReceivedGuidance")
    department = _opt_str(row.get("department"))

    if not _flag(row, "usesAI"):
        return NonUser(has_received_guidance=guidance, department=department)

    return AIUser(
        has_received_guidance=guidance,
        department=department,
        tools_used=_str_tuple(row, "toolsUsed"),
        custom_tools=_str_tuple(row, "customTools"),
        tasks_used=_str_tuple(row, "tasksUsed"),
        subscription_type=_opt_str(row.get("subscriptionType")),
        enters_sensitive_data=_opt_str(row.get("entersSensitiveData")),
        has_approval=_opt_str(row.get("hasApproval")),
    )


def parse_responses(rows: Iterable[Mapping]) -> List[ResponseRecord]:
    """Parse every row of one survey; see :func:`parse_response`."""

    records = [parse_response(row) for row in rows]
    logger.debug("Parsed %d survey response rows", len(records))
    return records
