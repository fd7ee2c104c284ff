"""Typed dataclasses describing the pageflow engine configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from ..errors import ModuleConfigError


class EngineConfigError(ModuleConfigError):
    """Raised when the engine configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ModuleSource:
    """A module definition the engine should load."""

    key: str
    path: Path
    reject_duplicate_actions: bool = False


@dc.dataclass(slots=True)
class EngineConfig:
    """Configured module sources alongside shared defaults."""

    modules: dict[str, ModuleSource]
    modules_dir: Path = Path("modules")
    reject_duplicate_actions: bool = False

    def get_module(self, key: str | None) -> ModuleSource:
        """Return the requested module source or fall back to the first one."""
        if key is None:
            if not self.modules:  # pragma: no cover - configuration error
                msg = "No modules configured."
                raise EngineConfigError(msg)
            return next(iter(self.modules.values()))
        try:
            return self.modules[key]
        except KeyError as exc:
            available = ", ".join(sorted(self.modules))
            msg = f"Unknown module '{key}'. Known modules: {available}"
            raise KeyError(msg) from exc


__all__ = ["EngineConfig", "EngineConfigError", "ModuleSource"]
