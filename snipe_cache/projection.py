"""
Field projection helpers.

A :class:`Snapshot` is the frozen, shallow copy of the selected attributes of
a Discord message at capture time. :func:`project` builds one from any object
exposing attributes; names the object lacks are captured as ``None`` so every
snapshot carries exactly the configured keys.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Tuple

DEFAULT_PROPERTIES: Tuple[str, ...] = ("content", "embeds", "author", "attachments")


class Snapshot(Mapping):
    """Read-only mapping of captured message attributes."""

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, Any] | None = None) -> None:
        object.__setattr__(self, "_fields", dict(fields or {}))

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails, i.e. for captured field names.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError as exc:
            raise AttributeError(
                f"Snapshot has no captured field {name!r}"
            ) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Snapshot is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Snapshot is immutable")

    def __repr__(self) -> str:
        return f"Snapshot({self._fields!r})"


def validate_properties(properties: Iterable[str]) -> Tuple[str, ...]:
    """Return ``properties`` as a tuple, rejecting non-string names."""

    if isinstance(properties, str):
        raise ValueError("properties must be a sequence of names, not a string")
    props = tuple(properties)
    bad = [p for p in props if not isinstance(p, str) or not p]
    if bad:
        raise ValueError(f"Invalid property names: {bad!r}")
    return props


def project(entity: Any, properties: Iterable[str]) -> Snapshot:
    """
    Copy the attributes named in ``properties`` off ``entity``.

    :param entity: Object to read from (usually a :class:`discord.Message`).
    :param properties: Attribute names to capture, in output order.
    :returns: A :class:`Snapshot` holding exactly those names.
    """
    return Snapshot({name: getattr(entity, name, None) for name in properties})


__all__ = ["DEFAULT_PROPERTIES", "Snapshot", "project", "validate_properties"]
