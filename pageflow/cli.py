"""Cyclopts CLI entrypoint for inspecting and validating page-flow modules.

The ``pageflow`` console script defined here loads the module definitions
listed in ``pageflow.yaml``, validates every action in them, prints resolved
state summaries and resolves action references the way a request would.
Typical usage is ``pageflow validate`` in CI so broken action references are
caught before deployment.

Examples
--------
Validate every configured module:

>>> from pageflow.cli import main
>>> main()  # doctest: +SKIP

Describe one state as JSON:

>>> from pageflow.cli import app
>>> app(
...     ["describe", "--module", "orders", "--state", "list", "--format", "json"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_engine_config
from .errors import PageflowError
from .module import load_modules
from .report import StateReportRenderer, summarise_state

DEFAULT_CONFIG = Path("config/pageflow.yaml")

app = App(name="pageflow", config=cyclopts.config.Env("PAGEFLOW_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s %(message)s",
    )


@app.command(help="Load configured modules and validate every action.")
def validate(
    *,
    module: typ.Annotated[
        str | None, Parameter(help="Module key; validates all modules when omitted")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to engine config", env_var="PAGEFLOW_CONFIG")
    ] = DEFAULT_CONFIG,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Validate module definitions, stopping at the first invalid action.

    Parameters
    ----------
    module : str or None, optional
        Module key from the engine config; when ``None`` (default) every
        configured module is validated.
    config : Path, optional
        Path to the ``pageflow.yaml`` configuration file.
    verbose : bool, optional
        Log module and state construction at DEBUG level.

    Returns
    -------
    None
        Prints ``ok <module>`` for every valid module. Exits with status 1 and
        prints the error when a module fails to load or an action fails
        validation.
    """
    _configure_logging(verbose)
    engine_config = load_engine_config(config)
    keys = [module] if module else list(engine_config.modules)
    for key in keys:
        try:
            load_modules(engine_config, [key])[key].validate()
        except PageflowError as exc:
            print(f"invalid {key}: {exc}", file=sys.stderr)
            sys.exit(1)
        print(f"ok {key}")


@app.command(help="Print the resolved attributes, actions and buffers of a state.")
def describe(
    *,
    state: typ.Annotated[str, Parameter(help="State name")],
    module: typ.Annotated[
        str | None, Parameter(help="Module key; defaults to the first module")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to engine config", env_var="PAGEFLOW_CONFIG")
    ] = DEFAULT_CONFIG,
    output_format: typ.Annotated[
        typ.Literal["text", "json"], Parameter(name="--format", help="Output format")
    ] = "text",
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Print a summary of one resolved state.

    Parameters
    ----------
    state : str
        Name of the state to describe.
    module : str or None, optional
        Module key from the engine config.
    config : Path, optional
        Path to the ``pageflow.yaml`` configuration file.
    output_format : {"text", "json"}, optional
        ``text`` renders the Jinja report; ``json`` prints msgspec JSON.
    verbose : bool, optional
        Log module and state construction at DEBUG level.
    """
    _configure_logging(verbose)
    engine_config = load_engine_config(config)
    source = engine_config.get_module(module)
    loaded = load_modules(engine_config, [source.key])[source.key]
    summary = summarise_state(loaded.get_state(state))
    renderer = StateReportRenderer()
    if output_format == "json":
        print(renderer.render_json(summary), end="")
    else:
        print(renderer.render_text(summary), end="")


@app.command(help="Resolve an action name as seen from a state.")
def resolve(
    *,
    state: typ.Annotated[str, Parameter(help="State the reference is made from")],
    action: typ.Annotated[
        str, Parameter(help="Action name, optionally qualified as state/action")
    ],
    module: typ.Annotated[
        str | None, Parameter(help="Module key; defaults to the first module")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to engine config", env_var="PAGEFLOW_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print the action an action reference resolves to and its owning scope.

    Exits with status 1 when the state or action cannot be found.
    """
    _configure_logging(False)
    engine_config = load_engine_config(config)
    source = engine_config.get_module(module)
    loaded = load_modules(engine_config, [source.key])[source.key]
    try:
        definition = loaded.get_state(state).get_action_by_name(action)
    except PageflowError as exc:
        print(f"unresolved {action}: {exc}", file=sys.stderr)
        sys.exit(1)
    scope = "module" if definition.state_name is None else f"state {definition.state_name}"
    print(f"{definition.qualified_name} ({scope})")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``pageflow`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
