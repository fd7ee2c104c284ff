"""Behaviour tests for list-column eligibility probing using pytest-bdd.

Each scenario probes a single candidate column against the ``list`` state of
the shared ``orders`` module and checks the visibility the stub settles on.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from pageflow.datanode import (
    EvaluatedNodeInfoList,
    EvaluatedPresentationNode,
    NodeEvaluationContext,
    NodeInfo,
    NodeVisibility,
)

if typ.TYPE_CHECKING:
    from pageflow import Module
    from pageflow.datanode import EvaluatedNodeInfoStub

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "action_eligibility.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps."""
    return {"plus_privilege": False}


@given("the orders module is loaded")
def given_orders_module(orders_module: Module, scenario_state: ScenarioState) -> None:
    scenario_state["module"] = orders_module


@given(parsers.parse('a column stub context for the "{state}" state'))
def given_context_state(scenario_state: ScenarioState, state: str) -> None:
    scenario_state["state_name"] = state


@given("the viewer holds plus privilege")
def given_plus_privilege(scenario_state: ScenarioState) -> None:
    scenario_state["plus_privilege"] = True


@when(parsers.parse('a "{widget}" column bound to "{action}" is probed'))
def when_probe(scenario_state: ScenarioState, widget: str, action: str) -> None:
    """Probe one column with upstream EDIT visibility and keep the survivors."""
    module = typ.cast("Module", scenario_state["module"])
    context = NodeEvaluationContext(
        module.get_state(scenario_state["state_name"]),
        plus_privilege=scenario_state["plus_privilege"],
    )
    node_info = NodeInfo("COLUMN", "/ROOT/COLUMN", attributes={"widget": widget, "action": action})
    rows = EvaluatedNodeInfoList("rows")
    scenario_state["columns"] = rows.candidate_columns(
        EvaluatedPresentationNode("set-out"),
        context,
        [node_info],
        default_visibility=NodeVisibility.EDIT,
    )


@then(parsers.parse('the column visibility is "{visibility}"'))
def then_visibility(scenario_state: ScenarioState, visibility: str) -> None:
    columns = typ.cast("list[EvaluatedNodeInfoStub]", scenario_state["columns"])
    expected = NodeVisibility[visibility]
    if expected is NodeVisibility.DENIED:
        assert columns == []
    else:
        assert [column.visibility for column in columns] == [expected]
