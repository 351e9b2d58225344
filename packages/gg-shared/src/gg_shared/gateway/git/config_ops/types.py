"""Parsed git configuration: settings, remotes and fetch refspecs."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from gg_shared.gateway.git.ref_ops.types import REMOTES_PREFIX


@dataclass(frozen=True)
class FetchRefspec:
    """A single `remote.<name>.fetch` value.

    Either both sides carry exactly one "*" wildcard or neither does.

    Attributes:
        source: Ref pattern on the remote (e.g., "refs/heads/*")
        destination: Local ref pattern (e.g., "refs/remotes/origin/*"), or ""
            when the refspec fetches without storing
        force: True if the refspec started with "+"
    """

    source: str
    destination: str
    force: bool

    @staticmethod
    def parse(spec: str) -> FetchRefspec:
        """Parse "[+]<src>[:<dst>]".

        Raises:
            ValueError: If the wildcards on each side do not match up
        """
        force = spec.startswith("+")
        if force:
            spec = spec[1:]
        source, _, destination = spec.partition(":")
        source_stars = source.count("*")
        destination_stars = destination.count("*")
        if source_stars > 1 or destination_stars > 1:
            raise ValueError(f"refspec {spec!r} has more than one wildcard per side")
        if destination and source_stars != destination_stars:
            raise ValueError(f"refspec {spec!r} has mismatched wildcards")
        return FetchRefspec(source=source, destination=destination, force=force)

    @property
    def is_wildcard(self) -> bool:
        return "*" in self.source

    def __str__(self) -> str:
        prefix = "+" if self.force else ""
        if not self.destination:
            return prefix + self.source
        return f"{prefix}{self.source}:{self.destination}"

    def map_source(self, ref: str) -> str | None:
        """Map a remote ref to its local destination, or None if not matched."""
        if not self.destination:
            return None
        matched = _match_pattern(self.source, ref)
        if matched is None:
            return None
        return self.destination.replace("*", matched, 1)

    def map_destination(self, ref: str) -> str | None:
        """Map a local ref back to the remote ref it was fetched from."""
        if not self.destination:
            return None
        matched = _match_pattern(self.destination, ref)
        if matched is None:
            return None
        return self.source.replace("*", matched, 1)


def _match_pattern(pattern: str, ref: str) -> str | None:
    """Match ref against a refspec side.

    Returns the text matched by the wildcard ("" for a literal match), or None.
    """
    if "*" not in pattern:
        return "" if pattern == ref else None
    prefix, _, suffix = pattern.partition("*")
    if len(ref) <= len(prefix) + len(suffix):
        return None
    if not ref.startswith(prefix) or not ref.endswith(suffix):
        return None
    return ref[len(prefix) : len(ref) - len(suffix)]


@dataclass(frozen=True)
class Remote:
    """A configured remote.

    Attributes:
        name: Remote name (e.g., "origin")
        url: Fetch URL, or "" if not configured
        fetch: Fetch refspecs in configuration order
    """

    name: str
    url: str
    fetch: tuple[FetchRefspec, ...]

    def map_fetch(self, ref: str) -> str | None:
        """Return the local tracking ref for a remote ref, per the first matching refspec."""
        for spec in self.fetch:
            local = spec.map_source(ref)
            if local is not None:
                return local
        return None

    @property
    def head_alias(self) -> str:
        """The symbolic refs/remotes/<name>/HEAD ref created by clone."""
        return f"{REMOTES_PREFIX}{self.name}/HEAD"


def normalize_config_key(key: str) -> str:
    """Lowercase the section and variable name of a key.

    The subsection (everything between the first and last dot) is
    case-sensitive and kept as-is.
    """
    first = key.find(".")
    last = key.rfind(".")
    if first == -1:
        return key.lower()
    if first == last:
        return key.lower()
    return key[:first].lower() + key[first:last] + key[last:].lower()


class GitConfig:
    """Immutable view of `git config --list` entries.

    Keys may repeat; lookups return the last value, which is the one git
    itself uses for single-valued settings.
    """

    def __init__(self, entries: Iterable[tuple[str, str | None]] = ()) -> None:
        self._entries: tuple[tuple[str, str | None], ...] = tuple(
            (normalize_config_key(key), value) for key, value in entries
        )

    @property
    def entries(self) -> Sequence[tuple[str, str | None]]:
        return self._entries

    def value(self, key: str) -> str:
        """Return the last value for key, or "" if unset.

        A setting written without "=" (implicit true) also reads as "".
        """
        norm = normalize_config_key(key)
        found = ""
        for entry_key, entry_value in self._entries:
            if entry_key == norm:
                found = entry_value if entry_value is not None else ""
        return found

    def values(self, key: str) -> list[str]:
        """Return every value for a multi-valued key, in order."""
        norm = normalize_config_key(key)
        return [v if v is not None else "" for k, v in self._entries if k == norm]

    def list_remotes(self) -> dict[str, Remote]:
        """Collect remotes that have a URL or fetch refspec configured.

        Raises:
            ValueError: If a fetch refspec cannot be parsed
        """
        urls: dict[str, str] = {}
        fetches: dict[str, list[FetchRefspec]] = {}
        for key, value in self._entries:
            if not key.startswith("remote."):
                continue
            last = key.rfind(".")
            if last <= len("remote"):
                continue
            name = key[len("remote.") : last]
            variable = key[last + 1 :]
            if variable == "url":
                urls[name] = value or ""
            elif variable == "fetch" and value:
                fetches.setdefault(name, []).append(FetchRefspec.parse(value))
        remotes: dict[str, Remote] = {}
        for name in list(urls) + [n for n in fetches if n not in urls]:
            remotes[name] = Remote(
                name=name, url=urls.get(name, ""), fetch=tuple(fetches.get(name, []))
            )
        return remotes


def parse_config(data: str) -> GitConfig:
    """Parse `git config -z --list` output.

    Entries are NUL-terminated; the key is separated from the value by a
    newline. An entry without a newline is a key with no value.
    """
    entries: list[tuple[str, str | None]] = []
    for chunk in data.split("\0"):
        if not chunk:
            continue
        key, sep, value = chunk.partition("\n")
        entries.append((key, value if sep else None))
    return GitConfig(entries)
