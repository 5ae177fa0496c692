"""sailinit - Port suffix registry and setup for Laravel Sail projects."""

__version__ = "0.1.0"

from .allocator import Suggestion, SuffixAllocator
from .envfile import recover_suffix_from_env_text, setup_env
from .errors import (
    CollisionError,
    NotRegisteredError,
    PortRangeError,
    SailInitError,
    StoreReadError,
    StoreWriteError,
)
from .ports import (
    MAX_SUFFIX,
    PORT_BASES,
    BusyPort,
    check_ports_for_suffix,
    derive_ports,
    is_port_available,
    validate_suffix,
)
from .pruner import ProjectEntry, Pruner, PruneResult
from .registry import Registry, RegistryStore, normalize_project_path

__all__ = [
    "__version__",
    "SuffixAllocator",
    "Suggestion",
    "recover_suffix_from_env_text",
    "setup_env",
    "SailInitError",
    "PortRangeError",
    "StoreReadError",
    "StoreWriteError",
    "CollisionError",
    "NotRegisteredError",
    "MAX_SUFFIX",
    "PORT_BASES",
    "BusyPort",
    "check_ports_for_suffix",
    "derive_ports",
    "is_port_available",
    "validate_suffix",
    "ProjectEntry",
    "Pruner",
    "PruneResult",
    "Registry",
    "RegistryStore",
    "normalize_project_path",
]
