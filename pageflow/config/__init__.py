"""Load and validate the pageflow engine configuration YAML.

This subpackage parses the engine's ``pageflow.yaml`` file, merges global
defaults with per-module overrides and produces typed dataclasses
(:class:`EngineConfig`, :class:`ModuleSource`) that the loader and CLI consume.

Examples
--------
>>> from pathlib import Path
>>> from pageflow.config import load_engine_config
>>> config = load_engine_config(Path("config/pageflow.yaml"))  # doctest: +SKIP
>>> sorted(config.modules)  # doctest: +SKIP
['orders']
"""

from .loader import load_engine_config
from .models import EngineConfig, EngineConfigError, ModuleSource

__all__ = ["EngineConfig", "EngineConfigError", "ModuleSource", "load_engine_config"]
