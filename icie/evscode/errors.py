"""Exceptions raised while declaring into or collecting from invocation lists."""

from __future__ import annotations


class InvokeListError(Exception):
    """Base class for invocation-list failures."""


class PayloadTypeConflict(InvokeListError, TypeError):
    """A registration disagrees with the payload type fixed for its registry."""

    def __init__(self, registry_id: str, expected: type, got: type):
        self.registry_id = registry_id
        self.expected = expected
        self.got = got
        super().__init__(
            f"registry {registry_id!r} holds {expected.__qualname__} payloads, "
            f"cannot register {got.__qualname__}"
        )


class RegistrySealed(InvokeListError, RuntimeError):
    """A registration arrived after the registry was materialised."""

    def __init__(self, registry_id: str):
        self.registry_id = registry_id
        super().__init__(
            f"registry {registry_id!r} was already collected; "
            "declarations must be imported before first use"
        )


class RecursiveCollect(InvokeListError, RuntimeError):
    """A payload thunk called back into the registry it is being collected from."""

    def __init__(self, registry_id: str):
        self.registry_id = registry_id
        super().__init__(
            f"registry {registry_id!r} was re-entered while its payloads were being collected"
        )


class DuplicateConfigName(InvokeListError, ValueError):
    """Two options were declared under the same settings name."""


__all__ = [
    "DuplicateConfigName",
    "InvokeListError",
    "PayloadTypeConflict",
    "RecursiveCollect",
    "RegistrySealed",
]
