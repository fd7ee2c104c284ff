"""Behaviour tests for action resolution from states using pytest-bdd.

These scenarios load the shared ``orders`` module and resolve bare and
qualified action names from its states, checking which scope each reference
ends up in and which auto actions a state runs per category.

Usage
-----
Run ``pytest tests/bdd/test_state_resolution.py -v``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from pageflow import ActionNotFoundError, ModuleInternalError
from pageflow.actions import AutoActionType

if typ.TYPE_CHECKING:
    from pageflow import Module
    from pageflow.actions import ActionDefinition

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "state_resolution.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps.

    Returns
    -------
    ScenarioState
        Mutable dictionary used to exchange state between ``given``, ``when``,
        and ``then`` steps.
    """
    return {}


@given("the orders module is loaded")
def given_orders_module(orders_module: Module, scenario_state: ScenarioState) -> None:
    scenario_state["module"] = orders_module


@when(parsers.parse('the "{state}" state resolves the action "{action}"'))
def when_resolve(scenario_state: ScenarioState, state: str, action: str) -> None:
    """Resolve ``action`` from ``state``, recording the result or the error."""
    module = typ.cast("Module", scenario_state["module"])
    try:
        scenario_state["result"] = module.get_state(state).get_action_by_name(action)
    except ModuleInternalError as exc:
        scenario_state["error"] = exc


@then(parsers.parse('the resolved action belongs to state "{state}"'))
def then_state_scope(scenario_state: ScenarioState, state: str) -> None:
    result = typ.cast("ActionDefinition", scenario_state["result"])
    assert result.state_name == state


@then("the resolved action belongs to the module")
def then_module_scope(scenario_state: ScenarioState) -> None:
    result = typ.cast("ActionDefinition", scenario_state["result"])
    assert result.state_name is None


@then("resolution fails with an action-not-found error")
def then_not_found(scenario_state: ScenarioState) -> None:
    assert "result" not in scenario_state
    assert isinstance(scenario_state.get("error"), ActionNotFoundError)


@then(parsers.parse('the "{state}" state runs "{names}" for "{category}"'))
def then_auto_actions(scenario_state: ScenarioState, state: str, names: str, category: str) -> None:
    module = typ.cast("Module", scenario_state["module"])
    actions = module.get_state(state).get_auto_actions(AutoActionType(category))
    assert [action.name for action in actions] == [name.strip() for name in names.split(",")]
