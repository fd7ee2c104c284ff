"""Immutable action definitions built from ``fm:action`` elements."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .._constants import STATE_PATH_SEPARATOR
from ..errors import ActionValidationError, ModuleConfigError
from .registry import AUTO_ACTION_PREFIX, AutoActionType

if typ.TYPE_CHECKING:
    from ..metadata import MetadataNode
    from ..module import Module
    from ..state import State

KNOWN_COMMANDS = frozenset(
    {
        "alert",
        "assign",
        "call",
        "comment",
        "do",
        "else",
        "exit-module",
        "for-each",
        "go-to",
        "if",
        "init",
        "remove",
        "then",
        "validate",
    }
)


@dc.dataclass(frozen=True, slots=True)
class ActionCommand:
    """One command element inside an action body, with nested commands."""

    name: str
    attributes: tuple[tuple[str, str], ...] = ()
    children: tuple[ActionCommand, ...] = ()

    def attr(self, name: str) -> str | None:
        for key, value in self.attributes:
            if key == name:
                return value
        return None

    @classmethod
    def from_metadata(cls, node: MetadataNode) -> ActionCommand:
        return cls(
            name=node.name,
            attributes=tuple(node.attributes.items()),
            children=tuple(cls.from_metadata(child) for child in node.children()),
        )


@dc.dataclass(frozen=True, slots=True)
class ActionDefinition:
    """A named or auto action owned by exactly one module or state scope.

    Attributes
    ----------
    name : str
        Action name as declared; auto actions keep their full prefixed name.
    module_name : str
        Name of the module the action was declared in.
    state_name : str or None
        Declaring state, or ``None`` for module-level actions.
    auto_action_type : AutoActionType or None
        Category for auto actions; ``None`` for actions invoked by name.
    title : str
        Optional human-readable title.
    commands : tuple[ActionCommand, ...]
        Parsed action body in document order.
    """

    name: str
    module_name: str
    state_name: str | None = None
    auto_action_type: AutoActionType | None = None
    title: str = ""
    commands: tuple[ActionCommand, ...] = ()

    @property
    def is_auto_action(self) -> bool:
        return self.auto_action_type is not None

    @property
    def qualified_name(self) -> str:
        if self.state_name is None:
            return self.name
        return f"{self.state_name}{STATE_PATH_SEPARATOR}{self.name}"

    @classmethod
    def create(
        cls, node: MetadataNode, module: Module, state_name: str | None
    ) -> ActionDefinition:
        """Build an action from its ``fm:action`` element.

        Parameters
        ----------
        node : MetadataNode
            The action element.
        module : Module
            Module the action is declared in.
        state_name : str or None
            Declaring state, or ``None`` for module-level actions.

        Raises
        ------
        ModuleConfigError
            If the action has no name, or its name uses the ``auto-`` prefix
            without matching a known auto-action category.
        """
        scope = f"state '{state_name}'" if state_name else "the module-level action-list"
        raw_name = node.attr("name")
        if raw_name is None or not raw_name.strip():
            msg = f"Action with no name attribute found in {scope} of module '{module.name}'"
            raise ModuleConfigError(msg)
        name = raw_name.strip()

        auto_action_type = AutoActionType.from_action_name(name)
        if auto_action_type is None and name.startswith(AUTO_ACTION_PREFIX):
            msg = (
                f"Action '{name}' in {scope} of module '{module.name}' uses the "
                f"'{AUTO_ACTION_PREFIX}' prefix but is not a known auto action type"
            )
            raise ModuleConfigError(msg)

        return cls(
            name=name,
            module_name=module.name,
            state_name=state_name,
            auto_action_type=auto_action_type,
            title=node.attr("title") or "",
            commands=tuple(ActionCommand.from_metadata(child) for child in node.children()),
        )

    def validate(self, module: Module, state: State | None = None) -> None:
        """Check the action body against the module it belongs to.

        Commands are checked in document order and the first problem is raised
        as an :class:`~pageflow.errors.ActionValidationError`.
        """
        for command in self.commands:
            self._validate_command(command, module, state)

    def _validate_command(
        self, command: ActionCommand, module: Module, state: State | None
    ) -> None:
        if command.name not in KNOWN_COMMANDS:
            raise self._invalid(module, f"unknown command '{command.name}'")
        if command.name == "call":
            self._validate_call_target(command.attr("action"), module, state)
        elif command.name == "go-to":
            target = command.attr("state")
            if not target or not target.strip():
                raise self._invalid(module, "go-to command has no state attribute")
            if target.strip() not in module.states:
                raise self._invalid(module, f"go-to target state '{target}' does not exist")
        for child in command.children:
            self._validate_command(child, module, state)

    def _validate_call_target(
        self, target: str | None, module: Module, state: State | None
    ) -> None:
        if not target or not target.strip():
            raise self._invalid(module, "call command has no action attribute")
        state_part, _, action_part = target.strip().rpartition(STATE_PATH_SEPARATOR)
        if state_part:
            target_state = module.states.get(state_part)
            if target_state is None or action_part not in target_state.action_definition_map:
                raise self._invalid(module, f"call target '{target}' does not exist")
            return
        if action_part in module.action_definition_map:
            return
        if self.state_name is None:
            scopes = module.states.values()
        else:
            owner = state if state is not None else module.states.get(self.state_name)
            scopes = [owner] if owner is not None else []
        if any(action_part in scope.action_definition_map for scope in scopes):
            return
        raise self._invalid(module, f"call target '{target}' does not exist")

    def _invalid(self, module: Module, problem: str) -> ActionValidationError:
        msg = f"Action '{self.qualified_name}' in module '{module.name}': {problem}"
        return ActionValidationError(msg, action_name=self.name, state_name=self.state_name)


__all__ = ["KNOWN_COMMANDS", "ActionCommand", "ActionDefinition"]
