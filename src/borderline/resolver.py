"""Turning free-text guesses into canonical node ids."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Protocol

from .logger import get_logger

logger = get_logger(__name__)


class NameResolver(Protocol):
    """Anything that maps guess text to a node id, or None when nothing matches."""

    def resolve(self, text: str) -> Optional[str]: ...


class TableResolver:
    """Case-insensitive lookup over codes and accepted names.

    A guess matches a node code directly (``"frn"`` -> ``"FRN"``) or any
    accepted name of a node (``"france"`` -> ``"FRN"``). Excluded names never
    resolve, even when they would match.
    """

    def __init__(
        self,
        names: Mapping[str, Iterable[str]],
        *,
        excluded_names: Iterable[str] = (),
    ):
        self._names: Dict[str, List[str]] = {
            code: list(aliases) for code, aliases in names.items()
        }
        self._excluded = {name.casefold() for name in excluded_names}

        self._by_alias: Dict[str, str] = {}
        for code, aliases in self._names.items():
            for alias in aliases:
                # First code listing an alias keeps it.
                self._by_alias.setdefault(alias.casefold(), code)

    def resolve(self, text: str) -> Optional[str]:
        guess = (text or "").strip()
        if not guess:
            return None
        key = guess.casefold()
        if key in self._excluded:
            return None

        code = guess.upper()
        if code in self._names:
            return code

        code = self._by_alias.get(key)
        if code is None:
            logger.debug("No node matches guess %r", guess)
        return code

    def display_name(self, code: str) -> str:
        """First accepted name of ``code``, or the code itself."""
        aliases = self._names.get(code)
        return aliases[0] if aliases else code

    def known_names(self) -> List[str]:
        """Display names of every node, sorted."""
        return sorted(self.display_name(code) for code in self._names)
