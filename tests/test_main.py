"""Tests for the analytics command-line entry point."""
from __future__ import annotations

import json

import pytest

from shadow_ai_survey import main as main_module
from shadow_ai_survey.catalog import get_default_catalog


@pytest.fixture()
def responses_file(tmp_path):
    rows = [
        {
            "usesAI": True,
            "toolsUsed": ["chatgpt"],
            "customTools": ["chatgpt"],
            "tasksUsed": ["Translation"],
            "subscriptionType": "Free only",
            "entersSensitiveData": "Yes, regularly",
            "hasApproval": "No",
            "hasReceivedGuidance": False,
            "department": "Sales",
        },
        {
            "usesAI": False,
            "toolsUsed": [],
            "customTools": [],
            "tasksUsed": [],
            "subscriptionType": None,
            "entersSensitiveData": None,
            "hasApproval": None,
            "hasReceivedGuidance": True,
            "department": None,
        },
    ]
    path = tmp_path / "responses.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _fresh_default_catalog():
    get_default_catalog.cache_clear()
    yield
    get_default_catalog.cache_clear()


def test_prints_analytics_json(responses_file, capsys, monkeypatch):
    monkeypatch.setattr(main_module.config, "TOOL_CATALOG_PATH", None)

    exit_code = main_module.main([str(responses_file), "--indent", "0"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["totalResponses"] == 2
    assert payload["usesAI"] == {"yes": 1, "no": 1, "percentYes": 50}
    assert {row["toolId"]: row["toolName"] for row in payload["toolUsage"]} == {
        "chatgpt": "ChatGPT",
        "custom:chatgpt": "chatgpt",
    }
    assert payload["byDepartment"][0]["department"] == "Sales"
    assert payload["riskFlags"][0] == {
        "severity": "high",
        "message": "1 employee enters sensitive data into unapproved tools",
        "count": 1,
    }


def test_custom_catalog_option(responses_file, tmp_path, capsys):
    catalog_path = tmp_path / "tools.json"
    catalog_path.write_text(
        json.dumps(
            [{"id": "chatgpt", "name": "Chat Assistant", "vendor": "X", "category": "Chatbot"}]
        ),
        encoding="utf-8",
    )

    exit_code = main_module.main([str(responses_file), "--catalog", str(catalog_path)])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["toolUsage"][0]["toolName"] == "Chat Assistant"


def test_invalid_responses_file_exits_with_error(tmp_path, capsys):
    path = tmp_path / "responses.json"
    path.write_text(json.dumps({"usesAI": True}), encoding="utf-8")

    assert main_module.main([str(path)]) == 1
    assert capsys.readouterr().out == ""


def test_missing_responses_file_exits_with_error(tmp_path, capsys):
    assert main_module.main([str(tmp_path / "nope.json")]) == 1
    assert capsys.readouterr().out == ""


def test_bad_catalog_exits_with_error(responses_file, tmp_path):
    catalog_path = tmp_path / "tools.json"
    catalog_path.write_text("not json", encoding="utf-8")

    assert main_module.main([str(responses_file), "--catalog", str(catalog_path)]) == 1


@pytest.mark.parametrize(
    "rows",
    [
        [{"usesAI": True, "toolsUsed": 5, "hasReceivedGuidance": False}],
        [{"usesAI": "false", "hasReceivedGuidance": True}],
        [["usesAI", True]],
    ],
)
def test_malformed_rows_exit_with_error(tmp_path, capsys, rows):
    path = tmp_path / "responses.json"
    path.write_text(json.dumps(rows), encoding="utf-8")

    assert main_module.main([str(path)]) == 1
    assert capsys.readouterr().out == ""
