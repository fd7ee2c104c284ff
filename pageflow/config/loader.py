"""Load engine configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import EngineConfig, EngineConfigError, ModuleSource

DEFAULT_MODULES_DIR = "modules"


def load_engine_config(path: Path) -> EngineConfig:
    """Load the YAML configuration listing the module definitions to serve.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/pageflow.yaml``).

    Returns
    -------
    EngineConfig
        Module sources with per-module overrides applied over ``defaults``.
        Relative module paths are resolved against ``modules_dir``, which is
        itself resolved against the configuration file's directory.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    EngineConfigError
        If no modules are configured or a module entry has no ``path``.

    Examples
    --------
    >>> from pathlib import Path
    >>> from pageflow.config import load_engine_config
    >>> config = load_engine_config(Path("config/pageflow.yaml"))  # doctest: +SKIP
    >>> config.get_module("orders").path  # doctest: +SKIP
    PosixPath('config/modules/orders.xml')
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}

    modules_dir = path.parent / Path(defaults.get("modules_dir", DEFAULT_MODULES_DIR))
    default_reject = bool(defaults.get("reject_duplicate_actions", False))

    modules_raw = raw.get("modules") or {}
    if not modules_raw:
        msg = "No modules defined in engine configuration."
        raise EngineConfigError(msg)

    modules: dict[str, ModuleSource] = {}
    for key, payload in modules_raw.items():
        match payload:
            case str():
                modules[key] = _build_module_source(
                    key=key,
                    payload={"path": payload},
                    modules_dir=modules_dir,
                    default_reject=default_reject,
                )
            case dict():
                modules[key] = _build_module_source(
                    key=key,
                    payload=payload,
                    modules_dir=modules_dir,
                    default_reject=default_reject,
                )
            case _:
                msg = f"Module '{key}' is missing 'path'."
                raise EngineConfigError(msg)

    return EngineConfig(
        modules=modules,
        modules_dir=modules_dir,
        reject_duplicate_actions=default_reject,
    )


def _build_module_source(
    *,
    key: str,
    payload: typ.Mapping[str, typ.Any],
    modules_dir: Path,
    default_reject: bool,
) -> ModuleSource:
    """Build a ModuleSource for a single module entry using defaults and overrides."""
    raw_path = payload.get("path")
    if not raw_path:
        msg = f"Module '{key}' is missing 'path'."
        raise EngineConfigError(msg)
    module_path = Path(raw_path)
    if not module_path.is_absolute():
        module_path = modules_dir / module_path
    return ModuleSource(
        key=key,
        path=module_path,
        reject_duplicate_actions=bool(
            payload.get("reject_duplicate_actions", default_reject)
        ),
    )


__all__ = ["load_engine_config"]
