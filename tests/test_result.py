"""Tests for Ok/Err results and unwrapping."""

import dataclasses

import pytest

from jira_rest.errors import JiraRequestError
from jira_rest.result import Err, Ok, unwrap_or_raise


def test_ok_and_err_flags():
    assert Ok(1).is_ok and not Ok(1).is_err
    assert Err("boom").is_err and not Err("boom").is_ok


def test_results_are_immutable():
    result = Ok({"id": "1010"})
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.value = {}


def test_results_compare_by_value():
    assert Ok({"id": "1010"}) == Ok({"id": "1010"})
    assert Ok("x") != Err("x")


def test_unwrap_returns_payload_unchanged():
    payload = [{"id": "100040"}, {"id": "100041"}]
    assert unwrap_or_raise(Ok(payload), "Project.get_issues_or_raise") is payload


def test_unwrap_returns_falsy_payloads():
    assert unwrap_or_raise(Ok([]), "label") == []
    assert unwrap_or_raise(Ok(None), "label") is None


def test_unwrap_raises_on_err():
    reason = {"errorMessages": ["Issue does not exist"], "errors": {}}

    with pytest.raises(JiraRequestError) as exc_info:
        unwrap_or_raise(Err(reason), "jira_rest.project.Project.get_issue_or_raise")

    error = exc_info.value
    assert error.reason == reason
    assert error.label == "jira_rest.project.Project.get_issue_or_raise"
    assert str(error).startswith("Error in jira_rest.project.Project.get_issue_or_raise: ")
    assert "Issue does not exist" in str(error)


def test_unwrap_raises_on_transport_description():
    with pytest.raises(JiraRequestError, match="ConnectError: Connection refused"):
        unwrap_or_raise(Err("ConnectError: Connection refused"), "label")
