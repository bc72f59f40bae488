"""Dependencies shared by every connection worker."""

from dataclasses import dataclass, field
from typing import Optional

from minihttp.bootstrap.config import ServerConfig
from minihttp.domain.file_locks import PathLockRegistry
from minihttp.lifecycle.state import ServerLifecycle


@dataclass
class WorkerContext:
    """Read-only configuration plus the shared write-lock registry."""

    directory: str
    config: Optional[ServerConfig] = None
    lifecycle: Optional[ServerLifecycle] = None
    file_locks: PathLockRegistry = field(default_factory=PathLockRegistry)
