import os
from typing import Any, Dict, List, Tuple

from snipe_cache.eviction import ClearOptions, EvictionOptions
from snipe_cache.manager import DEFAULT_EMITTERS
from snipe_cache.projection import DEFAULT_PROPERTIES

_TRUE = ("1", "true", "yes")
_FALSE = ("0", "false", "no", "")


def _split_names(raw: str) -> List[str]:
    """Split a comma-separated string, trim whitespace, drop empties"""
    return [name.strip() for name in raw.split(",") if name.strip()]


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (1/true/yes or 0/false/no), got {value!r}")


def _as_seconds(name: str, value: Any) -> float | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number of seconds, got {value!r}") from exc


def _as_names(value: Any, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if value is None:
        return default
    if isinstance(value, str):
        return tuple(_split_names(value))
    return tuple(str(v) for v in value)


class Snipes:
    """Snapshot capture and eviction settings ([snipes] table or SNIPES_* env)."""

    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("snipes", {})

        self.EMITTERS: Tuple[str, ...] = _as_names(
            cfg.get("emitters", os.getenv("SNIPES_EMITTERS")), DEFAULT_EMITTERS
        )
        self.PROPERTIES: Tuple[str, ...] = _as_names(
            cfg.get("properties", os.getenv("SNIPES_PROPERTIES")), DEFAULT_PROPERTIES
        )
        self.FETCH_PARTIALS: bool = _as_bool(
            "SNIPES_FETCH_PARTIALS", cfg.get("fetch_partials", os.getenv("SNIPES_FETCH_PARTIALS", "0"))
        )

        # -- Eviction --
        self.CACHE_ENABLED: bool = _as_bool(
            "SNIPES_CACHE_ENABLED", cfg.get("cache_enabled", os.getenv("SNIPES_CACHE_ENABLED", "0"))
        )
        self.EXPIRES: float | None = _as_seconds(
            "SNIPES_EXPIRES", cfg.get("expires", os.getenv("SNIPES_EXPIRES"))
        )
        # Setting an interval turns the periodic sweep on
        self.CLEAR_INTERVAL: float | None = _as_seconds(
            "SNIPES_CLEAR_INTERVAL", cfg.get("clear_interval", os.getenv("SNIPES_CLEAR_INTERVAL"))
        )
        self.LOGGER: bool = _as_bool(
            "SNIPES_LOGGER", cfg.get("logger", os.getenv("SNIPES_LOGGER", "0"))
        )

    def eviction_options(self) -> EvictionOptions:
        clear = ClearOptions(interval=self.CLEAR_INTERVAL) if self.CLEAR_INTERVAL is not None else None
        return EvictionOptions(
            enabled=self.CACHE_ENABLED,
            expires=self.EXPIRES,
            clear=clear,
            logger=self.LOGGER,
        )

    def manager_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for :class:`snipe_cache.manager.SnipesManager`."""

        return {
            "emitters": self.EMITTERS,
            "properties": self.PROPERTIES,
            "fetch_partials": self.FETCH_PARTIALS,
            "cache": self.eviction_options(),
        }
