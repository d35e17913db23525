"""Declared options: each ``config(...)`` call registers one ``ConfigEntry``.

Options live next to the code that reads them. Their declarations are
gathered through the ``CONFIG_REGISTRY`` invocation list, so the settings
schema lists them in declaration order without a central table.
"""

from __future__ import annotations

import enum
import logging
import weakref
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from icie.evscode.errors import DuplicateConfigName
from icie.evscode.invoke_list import ChainRegistry, default_registry

logger = logging.getLogger(__name__)

CONFIG_REGISTRY = "evscode.config"

T = TypeVar("T")

_TRUE_WORDS = ("true", "1", "yes")
_FALSE_WORDS = ("false", "0", "no")

# ChainRegistry → option names declared in it
_declared_names: weakref.WeakKeyDictionary[ChainRegistry, set[str]] = (
    weakref.WeakKeyDictionary()
)


def type_tag(type_: type) -> str:
    """Map a Python option type to its settings-schema type name."""
    if issubclass(type_, enum.Enum):
        return "string"
    if type_ is bool:
        return "boolean"
    if type_ is int:
        return "integer"
    if type_ is float:
        return "number"
    if type_ is str:
        return "string"
    raise TypeError(f"unsupported option type: {type_.__qualname__}")


def enum_values(type_: type) -> tuple[str, ...]:
    if not issubclass(type_, enum.Enum):
        return ()
    values = tuple(member.value for member in type_)
    if not all(isinstance(v, str) for v in values):
        raise TypeError(f"{type_.__qualname__} members must have string values")
    return values


def to_json_value(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    return value


def _check_minimum(value: int | float, minimum: int | float | None) -> None:
    if minimum is not None and value < minimum:
        raise ValueError(f"expected a value >= {minimum}, got {value!r}")


def from_json_value(type_: type, raw: Any, minimum: int | float | None = None) -> Any:
    """Convert a stored settings value back into the option's type.

    Raises TypeError/ValueError when ``raw`` does not fit ``type_`` or is
    below ``minimum``.
    """
    if issubclass(type_, enum.Enum):
        return type_(raw)
    if type_ is bool:
        if not isinstance(raw, bool):
            raise TypeError(f"expected boolean, got {raw!r}")
        return raw
    if type_ is int:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise TypeError(f"expected integer, got {raw!r}")
        _check_minimum(raw, minimum)
        return raw
    if type_ is float:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise TypeError(f"expected number, got {raw!r}")
        _check_minimum(raw, minimum)
        return float(raw)
    if type_ is str:
        if not isinstance(raw, str):
            raise TypeError(f"expected string, got {raw!r}")
        return raw
    raise TypeError(f"unsupported option type: {type_.__qualname__}")


def parse_value(type_: type, raw: str, minimum: int | float | None = None) -> Any:
    """Parse a raw command-line string into a value of ``type_``."""
    text = raw.strip()
    if issubclass(type_, enum.Enum):
        for member in type_:
            if text.lower() in (member.value.lower(), member.name.lower()):
                return member
        choices = ", ".join(member.value for member in type_)
        raise ValueError(f"expected one of: {choices}; got: {raw}")
    if type_ is bool:
        if text.lower() in _TRUE_WORDS:
            return True
        if text.lower() in _FALSE_WORDS:
            return False
        raise ValueError(f"expected true/false, got: {raw}")
    if type_ is int:
        value = int(text)
    elif type_ is float:
        value = float(text)
    else:
        return raw
    _check_minimum(value, minimum)
    return value


class Config(Generic[T]):
    """Handle for one declared option; ``get()`` reads the bound settings."""

    def __init__(
        self,
        name: str,
        default: T,
        description: str,
        type_: type,
        minimum: int | float | None = None,
    ) -> None:
        self.name = name
        self.default = default
        self.description = description
        self.type = type_
        self.minimum = minimum
        self._settings: Mapping[str, Any] | None = None

    def __repr__(self) -> str:
        return f"Config({self.name!r}, default={self.default!r})"

    @property
    def bound(self) -> bool:
        return self._settings is not None

    def bind(self, settings: Mapping[str, Any] | None) -> None:
        self._settings = settings

    def get(self) -> T:
        settings = self._settings
        if settings is None or self.name not in settings:
            return self.default
        raw = settings[self.name]
        try:
            return from_json_value(self.type, raw, self.minimum)
        except (TypeError, ValueError) as exc:
            logger.warning(
                "Ignoring invalid value for %s (%s); using default %r",
                self.name,
                exc,
                self.default,
            )
            return self.default


@dataclass(frozen=True)
class ConfigEntry:
    name: str
    description: str
    default: Any
    type_tag: str
    enum_values: tuple[str, ...] = ()
    minimum: int | float | None = None
    handle: Config = field(default=None, compare=False, repr=False)

    @property
    def python_type(self) -> type:
        return self.handle.type

    @property
    def json_default(self) -> Any:
        return to_json_value(self.default)


def _entry_for(handle: Config) -> ConfigEntry:
    return ConfigEntry(
        name=handle.name,
        description=handle.description,
        default=handle.default,
        type_tag=type_tag(handle.type),
        enum_values=enum_values(handle.type),
        minimum=handle.minimum,
        handle=handle,
    )


def config(
    name: str,
    default: T,
    description: str,
    *,
    type: type | None = None,
    minimum: int | float | None = None,
    registry: ChainRegistry | None = None,
) -> Config[T]:
    """Declare an option and register its entry under ``CONFIG_REGISTRY``.

    Call at module level; the option appears in the schema in the order the
    declaring modules execute.
    """
    type_ = type or default.__class__
    type_tag(type_)  # reject unsupported types at declaration time
    enum_values(type_)
    if not isinstance(default, type_) or (isinstance(default, bool) and type_ is not bool):
        raise TypeError(
            f"default for {name} must be {type_.__qualname__}, got {default!r}"
        )
    if minimum is not None:
        if type_ not in (int, float):
            raise TypeError(f"minimum only applies to numeric options, not {name}")
        try:
            _check_minimum(default, minimum)
        except ValueError as exc:
            raise ValueError(f"default for {name}: {exc}") from exc

    target = registry or default_registry()
    names = _declared_names.setdefault(target, set())
    if name in names:
        raise DuplicateConfigName(f"option {name!r} is declared more than once")

    handle: Config[T] = Config(name, default, description, type_, minimum)
    target.register(CONFIG_REGISTRY, ConfigEntry, lambda: _entry_for(handle))
    names.add(name)
    return handle


def collect_entries(registry: ChainRegistry | None = None) -> tuple[ConfigEntry, ...]:
    return (registry or default_registry()).collect(CONFIG_REGISTRY)


def bind(entries: tuple[ConfigEntry, ...], settings: Mapping[str, Any]) -> None:
    """Point every entry's handle at ``settings`` so ``get()`` sees overrides."""
    for entry in entries:
        entry.handle.bind(settings)


def find_entry(entries: tuple[ConfigEntry, ...], name: str) -> ConfigEntry:
    for entry in entries:
        if entry.name == name:
            return entry
    raise KeyError(f"Unknown config key: {name}")


__all__ = [
    "CONFIG_REGISTRY",
    "Config",
    "ConfigEntry",
    "bind",
    "collect_entries",
    "config",
    "enum_values",
    "find_entry",
    "from_json_value",
    "parse_value",
    "to_json_value",
    "type_tag",
]
