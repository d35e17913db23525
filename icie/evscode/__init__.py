"""evscode: declaration-ordered registries and the option layer built on them."""

from icie.evscode.config import CONFIG_REGISTRY, Config, ConfigEntry, config
from icie.evscode.errors import (
    DuplicateConfigName,
    InvokeListError,
    PayloadTypeConflict,
    RecursiveCollect,
    RegistrySealed,
)
from icie.evscode.invoke_list import ChainRegistry, collect, declare, register

__all__ = [
    "CONFIG_REGISTRY",
    "ChainRegistry",
    "Config",
    "ConfigEntry",
    "DuplicateConfigName",
    "InvokeListError",
    "PayloadTypeConflict",
    "RecursiveCollect",
    "RegistrySealed",
    "collect",
    "config",
    "declare",
    "register",
]
