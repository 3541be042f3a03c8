"""Unit tests for risk flag generation."""
from __future__ import annotations

from shadow_ai_survey.analytics.aggregator import calculate_analytics
from shadow_ai_survey.analytics.models import (
    ApprovalBreakdown,
    DepartmentBreakdown,
    GuidanceGap,
    Severity,
)
from shadow_ai_survey.analytics.risk import generate_risk_flags, is_sensitive_unapproved
from shadow_ai_survey.catalog import ToolCatalog
from shadow_ai_survey.survey.models import AIUser, NonUser

EMPTY_CATALOG = ToolCatalog([])


def _user(sensitive, approval, department=None, guidance=True) -> AIUser:
    return AIUser(
        has_received_guidance=guidance,
        department=department,
        enters_sensitive_data=sensitive,
        has_approval=approval,
    )


def _dept(name, responses, sensitive, no_approval) -> DepartmentBreakdown:
    return DepartmentBreakdown(
        department=name,
        responses=responses,
        percent_using_ai=100,
        percent_sensitive_data=sensitive,
        percent_no_approval=no_approval,
    )


def test_is_sensitive_unapproved():
    assert is_sensitive_unapproved(_user("Yes, regularly", "No"))
    assert is_sensitive_unapproved(_user("Occasionally", "Unsure"))
    assert is_sensitive_unapproved(_user(None, None))
    assert not is_sensitive_unapproved(_user("No, never", "No"))
    assert not is_sensitive_unapproved(_user("Yes, regularly", "Yes"))


def test_single_employee_message_is_singular():
    flags = generate_risk_flags(
        [_user("Occasionally", "No")], ApprovalBreakdown(), GuidanceGap(), []
    )

    assert len(flags) == 1
    assert flags[0].severity is Severity.HIGH
    assert flags[0].message == "1 employee enters sensitive data into unapproved tools"
    assert flags[0].count == 1


def test_guidance_flag_requires_strict_majority():
    at_threshold = generate_risk_flags(
        [], ApprovalBreakdown(), GuidanceGap(2, 2, 50), []
    )
    above = generate_risk_flags([], ApprovalBreakdown(), GuidanceGap(1, 2, 67), [])

    assert at_threshold == []
    assert len(above) == 1
    assert above[0].severity is Severity.HIGH
    assert above[0].message == "67% of employees have not received AI guidance"
    assert above[0].count == 2


def test_unapproved_flag_is_medium():
    approval = ApprovalBreakdown(
        approved=2, not_approved=1, unsure=1, percent_unapproved=50
    )

    flags = generate_risk_flags([], approval, GuidanceGap(), [])

    assert len(flags) == 1
    assert flags[0].severity is Severity.MEDIUM
    assert flags[0].message == "50% of AI users lack manager/IT approval"
    assert flags[0].count == 2


def test_unapproved_flag_threshold_is_exclusive():
    approval = ApprovalBreakdown(approved=7, not_approved=3, percent_unapproved=30)

    assert generate_risk_flags([], approval, GuidanceGap(), []) == []


def test_department_flags_need_both_percentages_above_half():
    departments = [
        _dept("Finance", 4, 75, 100),
        _dept("Legal", 3, 100, 50),
        _dept("Sales", 2, 51, 51),
    ]

    flags = generate_risk_flags([], ApprovalBreakdown(), GuidanceGap(), departments)

    assert [flag.message for flag in flags] == [
        "Finance has high shadow AI exposure (75% sensitive data, 100% unapproved)",
        "Sales has high shadow AI exposure (51% sensitive data, 51% unapproved)",
    ]
    assert [flag.count for flag in flags] == [4, 2]


def test_flags_sorted_by_severity_keeping_generation_order():
    """High flags precede medium ones; equal severities keep raise order."""

    responses = [
        _user("Yes, regularly", "Unsure", department="Finance"),
        _user("Occasionally", "No", department="Finance"),
        NonUser(has_received_guidance=True, department="Legal"),
    ]

    result = calculate_analytics(responses, catalog=EMPTY_CATALOG)

    assert [(flag.severity, flag.count) for flag in result.risk_flags] == [
        (Severity.HIGH, 2),
        (Severity.HIGH, 2),
        (Severity.MEDIUM, 2),
    ]
    assert result.risk_flags[0].message.startswith("2 employees enter")
    assert result.risk_flags[1].message.startswith("Finance has high shadow AI")
    assert result.risk_flags[2].message == "100% of AI users lack manager/IT approval"


def test_all_high_flags_in_generation_order():
    responses = [
        _user("Occasionally", "No", department="Ops", guidance=False),
        _user("Occasionally", "No", department="Eng", guidance=False),
        _user("Occasionally", "No", department="Eng", guidance=False),
    ]

    result = calculate_analytics(responses, catalog=EMPTY_CATALOG)

    messages = [flag.message for flag in result.risk_flags]
    assert messages == [
        "3 employees enter sensitive data into unapproved tools",
        "100% of employees have not received AI guidance",
        "Eng has high shadow AI exposure (100% sensitive data, 100% unapproved)",
        "Ops has high shadow AI exposure (100% sensitive data, 100% unapproved)",
        "100% of AI users lack manager/IT approval",
    ]
