"""Logical button names and the wire commands tried for each.

Philips firmware revisions disagree on key names for a handful of buttons.
A logical command listed here is sent as each candidate in turn until the
TV accepts one; the first entry that answers HTTP 200 wins, so order
matters. Logical commands without an entry are sent verbatim.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

CommandAliases = Mapping[str, Tuple[str, ...]]

DEFAULT_COMMAND_ALIASES: CommandAliases = MappingProxyType(
    {
        "Confirm": ("Confirm", "Ok", "Select", "Enter"),
        "Home": ("Home", "SmartTV"),
        "Netflix": ("Netflix", "Launch_Netflix"),
        "YouTube": ("YouTube", "Launch_YouTube"),
    }
)


def build_aliases(
    overrides: Mapping[str, Iterable[str]] | None = None,
    *,
    base: CommandAliases = DEFAULT_COMMAND_ALIASES,
) -> CommandAliases:
    """Return a read-only alias table with ``overrides`` applied on top of ``base``.

    An override with no candidates removes the logical command from the table.
    """

    merged = {name: tuple(candidates) for name, candidates in base.items()}
    for name, candidates in (overrides or {}).items():
        values = tuple(candidate for candidate in candidates if candidate)
        if values:
            merged[name] = values
        else:
            merged.pop(name, None)
    return MappingProxyType(merged)


def resolve_candidates(
    command: str, aliases: CommandAliases = DEFAULT_COMMAND_ALIASES
) -> Tuple[str, ...]:
    """Return the wire commands to try for ``command``, in order."""

    return tuple(aliases.get(command, (command,)))
