"""aliasx CLI — pick, list, validate and run tasks.

Installed as ``aliasx`` console_script via pipx / pip.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator

import click

from aliasx import __version__, log
from aliasx.config import Config, Scope
from aliasx.errors import AliasxError, CommandFailed, NoTerminal, SelectionAborted, UnresolvedInput
from aliasx.registry import TaskRegistry


# ── Custom Click group that handles subcommand aliases ───────────────

class AliasxGroup(click.Group):
    """Resolve ``list`` / ``f`` to their canonical subcommands."""

    _ALIASES: dict[str, str] = {
        "list": "ls",
        "f": "fzf",
    }

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, self._ALIASES.get(cmd_name, cmd_name))

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        _, cmd, rest = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, rest


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def _parse_input_option(values: tuple[str, ...]) -> dict[str, str]:
    """Turn repeated ``--input id=value`` options into a selection map."""
    selections: dict[str, str] = {}
    for raw in values:
        input_id, sep, value = raw.partition("=")
        if not sep or not input_id.strip():
            raise click.BadParameter(
                f"Expected ID=VALUE, got '{raw}' (example: --input env=prod).",
                param_hint="--input",
            )
        selections[input_id.strip()] = value
    return selections


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Translate aliasx failures into log output and an exit status."""
    try:
        yield
    except SelectionAborted:
        log.warn("No selection made")
        sys.exit(1)
    except CommandFailed as e:
        log.error(str(e))
        sys.exit(130 if e.interrupted else e.exit_code)
    except AliasxError as e:
        log.error(str(e))
        sys.exit(1)


def _stdin_is_tty() -> bool:
    return sys.stdin.isatty()


def _load_registry(cfg: Config) -> TaskRegistry:
    if cfg.native:
        from aliasx.tasks.aliases import load_alias_source

        return TaskRegistry([load_alias_source(cfg)], cfg)

    from aliasx.tasks.io import load_sources

    sources = load_sources(cfg)
    log.debug(f"Loaded {len(sources)} task source(s) for scope '{cfg.scope}'")
    return TaskRegistry(sources, cfg)


def _execute_index(registry: TaskRegistry, index: int, cfg: Config, selections: dict[str, str]) -> None:
    """Prompt for any inputs still missing, then run task *index*."""
    from aliasx.template import missing_inputs

    source, entry = registry.find_task(index)
    missing = missing_inputs(entry.command, source, selections)
    if missing:
        if not _stdin_is_tty():
            raise UnresolvedInput(missing[0].id)

        from aliasx.tui.prompt import collect_inputs
        from aliasx.tui.session import TerminalSession

        with TerminalSession() as session:
            collect_inputs(registry, index, session, selections)

    registry.execute(index, selections, cfg.verbose)


def _pick_and_execute(registry: TaskRegistry, cfg: Config, query: str, selections: dict[str, str]) -> None:
    """Open the task picker, collect inputs, leave the TUI, then run."""
    if registry.total_count() == 0:
        log.warn("No tasks found. Add some to .aliasx.yaml or ~/.aliasx.yaml.")
        return
    if not _stdin_is_tty():
        raise NoTerminal()

    from aliasx.tui.prompt import collect_inputs
    from aliasx.tui.session import TerminalSession
    from aliasx.tui.task_fuzzy import task_fuzzy_finder

    with TerminalSession() as session:
        index = task_fuzzy_finder(registry, session, query=query, verbose=cfg.verbose)
        collect_inputs(registry, index, session, selections)

    registry.execute(index, selections, cfg.verbose)


@click.group(
    cls=AliasxGroup,
    invoke_without_command=True,
    context_settings=CONTEXT_SETTINGS,
)
@click.option("-i", "--index", type=int, default=None, help="Global index of the task to handle")
@click.option("-n", "--native", is_flag=True, help="Use native shell aliases (.bashrc, .zshrc etc)")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option(
    "-f",
    "--filter",
    "scope",
    type=click.Choice([s.value for s in Scope], case_sensitive=False),
    default=Scope.ALL.value,
    show_default=True,
    help="Which task files to include",
)
@click.option("--input", "inputs", multiple=True, metavar="ID=VALUE", help="Pre-select a value for an input")
@click.version_option(__version__, prog_name="aliasx")
@click.pass_context
def main(
    ctx: click.Context,
    index: int | None,
    native: bool,
    verbose: bool,
    scope: str,
    inputs: tuple[str, ...],
) -> None:
    """aliasx — Alias e(x)tended CLI.

    Runs named shell commands from .aliasx.yaml, .vscode/tasks.json and
    ~/.aliasx.yaml, picked through live fuzzy search.

    \b
    EXAMPLES:
      aliasx                      # fuzzy-pick a task and run it
      aliasx ls                   # list tasks
      aliasx fzf -q build         # fuzzy-pick with an initial query
      aliasx --index 0            # run task 0
      aliasx -i 3 --input env=dev # run task 3 with env pre-selected
      aliasx -n                   # pick from native shell aliases
      aliasx -f local ls          # list local tasks only
      aliasx -v validate          # validate every task verbosely

    \b
    EXIT STATUS:
      0    the task ran and succeeded
      1    error, aborted selection, or failed validation
      N    the task's own non-zero exit code
      130  the task was interrupted
    """
    log.set_verbose(verbose)

    cfg = Config(
        scope=Scope.parse(scope),
        native=native,
        verbose=verbose,
    )
    selections = _parse_input_option(inputs)

    ctx.ensure_object(dict)
    ctx.obj["cfg"] = cfg
    ctx.obj["index"] = index
    ctx.obj["selections"] = selections

    # ── If a subcommand was invoked, let it do the work ──────────
    if ctx.invoked_subcommand is not None:
        return

    with _reporting_errors():
        registry = _load_registry(cfg)
        if index is None:
            _pick_and_execute(registry, cfg, "", selections)
        else:
            _execute_index(registry, index, cfg, selections)


# ── Subcommand: ls ───────────────────────────────────────────────


@main.command()
@click.pass_context
def ls(ctx: click.Context) -> None:
    """List tasks (alias: list)."""
    cfg: Config = ctx.obj["cfg"]
    index: int | None = ctx.obj["index"]

    with _reporting_errors():
        registry = _load_registry(cfg)
        if index is None:
            registry.list_all(cfg.verbose)
        else:
            registry.list_at(index, cfg.verbose)


# ── Subcommand: fzf ──────────────────────────────────────────────


@main.command()
@click.option("-q", "--query", default="", help="Initial search query")
@click.pass_context
def fzf(ctx: click.Context, query: str) -> None:
    """Pick a task with the fuzzy finder and run it (alias: f)."""
    cfg: Config = ctx.obj["cfg"]

    with _reporting_errors():
        registry = _load_registry(cfg)
        _pick_and_execute(registry, cfg, query, ctx.obj["selections"])


# ── Subcommand: validate ─────────────────────────────────────────


@main.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Check that every placeholder of every task resolves."""
    cfg: Config = ctx.obj["cfg"]
    index: int | None = ctx.obj["index"]

    with _reporting_errors():
        registry = _load_registry(cfg)
        if index is None:
            failed = registry.validate_all(cfg.verbose).failed > 0
        else:
            failed = registry.validate_at(index, cfg.verbose).has_failures()

    if failed:
        ctx.exit(1)
