"""Common literal values used across pageflow.

These constants keep element paths, reserved names and namespaces in one place
so the state builder, the module loader and tests agree on them. Intended for
internal use within the pageflow package.

Examples
--------
>>> from pageflow import _constants
>>> _constants.SET_PAGE_BUFFER_NAME
'set-page'
>>> "fox_module" in _constants.FM_NAMESPACE
True
"""

FM_NAMESPACE = "http://www.og.dti.gov/fox_module"

SET_PAGE_BUFFER_NAME = "set-page"
STATE_PATH_SEPARATOR = "/"

STATE_SET_BUFFER_PATH = "presentation/set-buffer"
STATE_SET_PAGE_PATH = "presentation/set-page"
DISPLAY_ATTR_PATH = "presentation/display-attr-list/attr"
IMPLICATED_DATA_DEFINITION_PATH = (
    "presentation/implicated-data-definition-list/data-definition"
)
ACTION_LIST_PATH = "action-list/action"
XPATH_LIST_PATH = "xpath-list/xpath"
STATE_LIST_PATH = "state-list/state"
