"""Command line front end evaluating set operations over element lists."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Callable, Literal

import click

from .map_set import MapSet

Level = Literal["debug", "info", "warning", "error"]

levels = ["debug", "info", "warning", "error"]

_level_order = {level: i for i, level in enumerate(levels)}

algebra_operations: dict[str, Callable[[MapSet[str], MapSet[str]], MapSet[str]]] = {
    "union": MapSet.union,
    "intersect": MapSet.intersect,
    "diff": MapSet.diff,
    "sym-diff": MapSet.sym_diff,
}

membership_operations: dict[str, Callable[..., bool]] = {
    "contains": MapSet.contains,
    "contains-any": MapSet.contains_any,
}


@dataclass
class InputError(Exception):
    """An error in user input."""

    where: str | None
    message: str

    def __str__(self) -> str:
        if self.where is None:
            return self.message
        return f"{self.where}: {self.message}"


@dataclass
class LogContext:
    """Settings used by `log` to filter and format messages."""

    app_name: str | None = "mapset"
    """Messages are prefixed with this if set."""

    level: Level = "info"
    """The minimum log level to display."""


log_context = LogContext()


def format_message(msg: str, level: Level) -> str:
    prefix = ""
    if log_context.app_name:
        prefix = f"{click.style(log_context.app_name, fg='blue')}: "

    formatted_lines: list[str] = []

    for line in msg.splitlines():
        if level == "debug":
            formatted_lines.append(prefix + click.style(f"DEBUG: {line}", fg="cyan"))
        elif level == "warning":
            formatted_lines.append(prefix + click.style(f"WARNING: {line}", fg="yellow"))
        elif level == "error":
            formatted_lines.append(prefix + click.style(f"ERROR: {line}", fg="red"))
        else:
            formatted_lines.append(prefix + line)
    return "\n".join(formatted_lines)


def log(msg: str, level: Level = "info") -> None:
    """Write a message to stderr unless it is below the configured log level."""
    if _level_order[level] < _level_order[log_context.level]:
        return
    click.echo(format_message(msg, level), err=True)


def parse_set(spec: str, separator: str = ",", strip: bool = True) -> MapSet[str]:
    """Parse a command line set argument.

    ``@PATH`` reads whitespace separated elements from a file, with ``@-`` reading from stdin.
    Anything else is a list of elements joined by ``separator``.
    """
    if spec.startswith("@"):
        path = spec[1:]
        if not path:
            raise InputError(spec, "expected a file name after '@'")
        try:
            with click.open_file(path, encoding="utf-8") as file:
                return MapSet(*file.read().split())
        except OSError as e:
            raise InputError(spec, f"cannot read file: {e.strerror or e}") from e
        except UnicodeDecodeError as e:
            raise InputError(spec, f"cannot decode file: {e.reason}") from e

    items = spec.split(separator)
    if strip:
        items = [item.strip() for item in items if item.strip()]
    return MapSet(*items)


def _check_separator(ctx: click.Context, param: click.Parameter, value: str) -> str:
    if not value:
        raise click.BadParameter("the separator must not be empty")
    return value


@click.command(context_settings={"auto_envvar_prefix": "MAPSET"})
@click.option(
    "--log-level",
    type=click.Choice(levels),
    default="info",
    show_default=True,
    help="Minimum level of messages written to stderr.",
)
@click.option(
    "--separator",
    default=",",
    show_default=True,
    callback=_check_separator,
    help="Separator between the elements of an inline set.",
)
@click.option(
    "--strip/--no-strip",
    default=True,
    show_default=True,
    help="Strip whitespace around inline elements and drop empty ones.",
)
@click.argument(
    "operation",
    type=click.Choice([*algebra_operations, *membership_operations]),
)
@click.argument("sets", nargs=-1, required=True)
@click.pass_context
def main(
    ctx: click.Context,
    operation: str,
    sets: tuple[str, ...],
    log_level: Level,
    separator: str,
    strip: bool,
) -> None:
    """Evaluate OPERATION over the given SETS and print the result.

    Each SET is a list of elements separated by commas, or @PATH to read whitespace separated
    elements from a file (@- reads stdin). Algebra operations are applied left to right. The
    membership operations check whether the first set contains all (contains) or any
    (contains-any) of the elements of the remaining sets and exit with status 1 when it does not.
    """
    log_context.level = log_level

    try:
        parsed = [parse_set(spec, separator, strip) for spec in sets]
    except InputError as e:
        log(str(e), "error")
        ctx.exit(2)

    for i, value in enumerate(parsed, 1):
        log(f"set {i}: {len(value)} element(s)", "debug")

    if operation in algebra_operations:
        if len(parsed) == 1:
            log(f"{operation} of a single set is that set", "warning")
        result = reduce(algebra_operations[operation], parsed)
        log(f"{operation}: {len(result)} element(s)", "debug")
        click.echo(str(result))
        return

    first, *rest = parsed
    if not rest:
        log(f"{operation} without elements to check is vacuous", "warning")
    elements = reduce(MapSet.union, rest, MapSet())
    found = membership_operations[operation](first, *elements)
    click.echo("true" if found else "false")
    if not found:
        ctx.exit(1)
