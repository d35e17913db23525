"""Invocation lists: declaration-ordered chains of deferred payloads.

Each declaration site calls ``register`` while its module body executes. The
registration allocates the next index in the registry, appends a node holding
the payload thunk, and relinks the previous tail to it. Nothing is evaluated
until ``collect`` walks the chain from its sentinel, after which the ordered
payloads are cached for the life of the process.

Chains are stored as index-addressed arenas: ``nodes[i].index == i`` and the
sentinel lives at position 0.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from icie.evscode.errors import PayloadTypeConflict, RecursiveCollect, RegistrySealed

logger = logging.getLogger(__name__)

RegistryId = str
SENTINEL_INDEX = 0


@dataclass
class Node:
    index: int
    payload_thunk: Callable[[], Any] | None
    is_terminal: bool = True
    next: int = SENTINEL_INDEX  # own index while terminal

    @property
    def is_sentinel(self) -> bool:
        return self.index == SENTINEL_INDEX


class SequenceAllocator:
    """Hands out 1, 2, 3, ... per registry id."""

    def __init__(self) -> None:
        self._counters: dict[RegistryId, int] = {}

    def next(self, registry_id: RegistryId) -> int:
        value = self._counters.get(registry_id, SENTINEL_INDEX) + 1
        self._counters[registry_id] = value
        return value

    def peek(self, registry_id: RegistryId) -> int:
        """Return the last index handed out for ``registry_id`` (0 if none)."""
        return self._counters.get(registry_id, SENTINEL_INDEX)


class InvocationList:
    """One registry's chain plus its materialisation cache."""

    def __init__(self, registry_id: RegistryId, payload_type: type) -> None:
        self.registry_id = registry_id
        self.payload_type = payload_type
        self._nodes: list[Node] = [Node(SENTINEL_INDEX, None)]
        self._lock = threading.RLock()
        self._payloads: tuple[Any, ...] | None = None
        self._walker: int | None = None  # ident of the thread inside _walk

    def __len__(self) -> int:
        return len(self._nodes) - 1

    @property
    def sealed(self) -> bool:
        return self._payloads is not None

    @property
    def tail(self) -> Node:
        return self._nodes[-1]

    def nodes(self) -> tuple[Node, ...]:
        """Snapshot of the arena; mutating the copies does not affect the chain."""
        with self._lock:
            return tuple(replace(node) for node in self._nodes)

    def link(self, allocator: SequenceAllocator, payload_thunk: Callable[[], Any]) -> int:
        """Append a provisional-terminal node and demote the previous tail."""
        with self._lock:
            self._check_not_walking()
            if self._payloads is not None:
                raise RegistrySealed(self.registry_id)
            index = allocator.next(self.registry_id)
            if index != len(self._nodes):
                raise AssertionError(
                    f"registry {self.registry_id!r}: allocated index {index}, "
                    f"expected {len(self._nodes)}"
                )
            node = Node(index, payload_thunk, is_terminal=True, next=index)
            prev = self._nodes[index - 1]
            prev.is_terminal = False
            prev.next = index
            self._nodes.append(node)
        logger.debug("Registered node %d in %r", index, self.registry_id)
        return index

    def materialize(self) -> tuple[Any, ...]:
        payloads = self._payloads
        if payloads is not None:
            return payloads
        with self._lock:
            if self._payloads is None:
                self._check_not_walking()
                self._walker = threading.get_ident()
                try:
                    self._payloads = self._walk()
                finally:
                    self._walker = None
                logger.debug(
                    "Materialised %d payloads from %r",
                    len(self._payloads),
                    self.registry_id,
                )
            return self._payloads

    def _check_not_walking(self) -> None:
        if self._walker == threading.get_ident():
            raise RecursiveCollect(self.registry_id)

    def _walk(self) -> tuple[Any, ...]:
        payloads = []
        node = self._nodes[SENTINEL_INDEX]
        while not node.is_terminal:
            node = self._nodes[node.next]
            payloads.append(node.payload_thunk())
        return tuple(payloads)


class ChainRegistry:
    """Namespace table: one independent ``InvocationList`` per registry id."""

    def __init__(self) -> None:
        self._allocator = SequenceAllocator()
        self._chains: dict[RegistryId, InvocationList] = {}
        self._lock = threading.Lock()

    def declare(self, registry_id: RegistryId, payload_type: type) -> InvocationList:
        """Create the sentinel for ``registry_id`` or confirm its payload type."""
        if not isinstance(payload_type, type):
            raise TypeError(f"payload type must be a class, got {payload_type!r}")
        with self._lock:
            chain = self._chains.get(registry_id)
            if chain is None:
                chain = InvocationList(registry_id, payload_type)
                self._chains[registry_id] = chain
                logger.debug(
                    "Declared registry %r for %s payloads",
                    registry_id,
                    payload_type.__qualname__,
                )
            elif chain.payload_type is not payload_type:
                raise PayloadTypeConflict(registry_id, chain.payload_type, payload_type)
        return chain

    def register(
        self,
        registry_id: RegistryId,
        payload_type: type,
        payload_thunk: Callable[[], Any],
    ) -> None:
        if not callable(payload_thunk):
            raise TypeError(f"payload thunk must be callable, got {payload_thunk!r}")
        chain = self.declare(registry_id, payload_type)
        chain.link(self._allocator, payload_thunk)

    def collect(self, registry_id: RegistryId) -> tuple[Any, ...]:
        """Return the payloads of ``registry_id`` in declaration order.

        An id nothing was registered under yields an empty tuple. The first
        successful walk is cached; concurrent first callers wait for it.
        """
        with self._lock:
            chain = self._chains.get(registry_id)
        if chain is None:
            return ()
        return chain.materialize()

    def chain(self, registry_id: RegistryId) -> tuple[Node, ...]:
        with self._lock:
            chain = self._chains.get(registry_id)
        if chain is None:
            return ()
        return chain.nodes()

    def registry_ids(self) -> list[RegistryId]:
        with self._lock:
            return sorted(self._chains)


_default_registry = ChainRegistry()


def default_registry() -> ChainRegistry:
    return _default_registry


def declare(registry_id: RegistryId, payload_type: type) -> None:
    _default_registry.declare(registry_id, payload_type)


def register(
    registry_id: RegistryId,
    payload_type: type,
    payload_thunk: Callable[[], Any],
) -> None:
    _default_registry.register(registry_id, payload_type, payload_thunk)


def collect(registry_id: RegistryId) -> tuple[Any, ...]:
    return _default_registry.collect(registry_id)


def registry_ids() -> list[RegistryId]:
    return _default_registry.registry_ids()


__all__ = [
    "ChainRegistry",
    "InvocationList",
    "Node",
    "RegistryId",
    "SENTINEL_INDEX",
    "SequenceAllocator",
    "collect",
    "declare",
    "default_registry",
    "register",
    "registry_ids",
]
