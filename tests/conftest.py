"""Shared fixtures for pageflow tests.

The ``orders`` module declares module-level display attributes, stored XPaths,
named actions and auto actions, plus two states: ``list`` overrides several of
the module's declarations and ``edit`` inherits them unchanged.
"""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from pageflow import parse_module
from pageflow._constants import FM_NAMESPACE
from pageflow.metadata import parse_metadata

if typ.TYPE_CHECKING:
    from pageflow import Module
    from pageflow.metadata import MetadataNode

FM = FM_NAMESPACE

ORDERS_MODULE_XML = dedent(
    f"""\
    <fm:module xmlns:fm="{FM}" name="orders">
      <fm:presentation>
        <fm:display-attr-list>
          <fm:attr name="a">1</fm:attr>
          <fm:attr name="b">2</fm:attr>
        </fm:display-attr-list>
      </fm:presentation>
      <fm:xpath-list>
        <fm:xpath name="order-root" value="/*/ORDER"/>
        <fm:xpath name="shared" value="/*/SHARED"/>
      </fm:xpath-list>
      <fm:action-list>
        <fm:action name="save"><fm:assign target="/*/SAVED" expr="'Y'"/></fm:action>
        <fm:action name="home"><fm:go-to state="list"/></fm:action>
        <fm:action name="shared-only"/>
        <fm:action name="auto-state-init"><fm:init/></fm:action>
        <fm:action name="auto-state-init-audit"><fm:call action="shared-only"/></fm:action>
        <fm:action name="auto-action-init"/>
      </fm:action-list>
      <fm:state-list>
        <fm:state name="list" title="Order list">
          <fm:presentation>
            <fm:set-page document-type="HTML5"><fm:html><fm:body/></fm:html></fm:set-page>
            <fm:set-buffer name="header"><fm:h1/></fm:set-buffer>
            <fm:set-buffer name="footer"/>
            <fm:display-attr-list>
              <fm:attr name="b">9</fm:attr>
              <fm:attr name="c">3</fm:attr>
            </fm:display-attr-list>
            <fm:implicated-data-definition-list>
              <fm:data-definition name="order-lines" match=":{{order-root}}"/>
              <fm:data-definition name="customers"/>
            </fm:implicated-data-definition-list>
          </fm:presentation>
          <fm:xpath-list>
            <fm:xpath name="order-root" value="/*/LIST/ORDER"/>
          </fm:xpath-list>
          <fm:action-list>
            <fm:action name="save" title="Save list"><fm:call action="refresh"/></fm:action>
            <fm:action name="refresh"/>
            <fm:action name="auto-state-init-list"><fm:call action="refresh"/></fm:action>
          </fm:action-list>
        </fm:state>
        <fm:state name="edit">
          <fm:action-list>
            <fm:action name="submit">
              <fm:call action="list/refresh"/>
              <fm:go-to state="list"/>
            </fm:action>
          </fm:action-list>
        </fm:state>
      </fm:state-list>
    </fm:module>
    """
)


def _build_state_node(
    body: str, *, name: str | None = "probe", title: str | None = None
) -> MetadataNode:
    """Return a namespaced ``fm:state`` node wrapping ``body``."""
    attrs = ""
    if name is not None:
        attrs += f' name="{name}"'
    if title is not None:
        attrs += f' title="{title}"'
    return parse_metadata(f'<fm:state xmlns:fm="{FM}"{attrs}>{body}</fm:state>')


@pytest.fixture
def orders_xml() -> str:
    """Return the XML text of the ``orders`` module."""
    return ORDERS_MODULE_XML


@pytest.fixture
def orders_module() -> Module:
    """Return the fully loaded ``orders`` module."""
    return parse_module(ORDERS_MODULE_XML)


@pytest.fixture
def state_node() -> typ.Callable[..., MetadataNode]:
    """Return a factory building ``fm:state`` nodes from body markup."""
    return _build_state_node
