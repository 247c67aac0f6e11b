"""
EchoAPI portable mode patcher.

Patches the application's main.js so it stores all data next to the
executable, and reverts it from a backup on the next run.
"""

from portable_patch.portable_patch_config import PortablePatchConfig
from portable_patch.portable_patch_exceptions import (
    AppLayoutError,
    BackupMissingError,
    PortablePatchConfigError,
    PortablePatchError,
)
from portable_patch.portable_patch_session import PatchSession
from portable_patch.portable_patcher import PortablePatchAction, PortablePatcher, PortablePatchResult

__version__ = "1.0.0"

__all__ = [
    "AppLayoutError",
    "BackupMissingError",
    "PatchSession",
    "PortablePatchAction",
    "PortablePatchConfig",
    "PortablePatchConfigError",
    "PortablePatchError",
    "PortablePatchResult",
    "PortablePatcher",
]
