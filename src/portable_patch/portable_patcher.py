"""
Portable mode patcher for the EchoAPI desktop application.

Toggles resources/app/main.js between its original form and a patched form
that keeps all application data under resources/app/data.
"""

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List

from text_patch import TextPatchAnchorError, TextPatchApplier, TextPatchResult

from portable_patch.portable_patch_config import PortablePatchConfig
from portable_patch.portable_patch_exceptions import AppLayoutError, BackupMissingError
from portable_patch.portable_patch_session import PatchSession
from portable_patch.portable_patch_snippets import PATCH_MARKER, build_patch_rules


class PortablePatchAction(Enum):
    """What a patcher run ended up doing."""
    APPLIED = 'applied'
    REVERTED = 'reverted'
    CANCELLED = 'cancelled'
    FAILED = 'failed'


@dataclass
class PortablePatchResult:
    """Outcome of an apply or revert operation."""

    action: PortablePatchAction
    message: str
    skipped_rules: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True unless the operation failed."""
        return self.action != PortablePatchAction.FAILED


class PortablePatcher:
    """
    Applies or reverts the portable mode patch.

    All paths are derived from an application root (the directory that holds
    the "resources" folder) and a PortablePatchConfig.
    """

    def __init__(self, root: str | Path, session: PatchSession, config: PortablePatchConfig | None = None):
        """
        Initialize the patcher.

        Args:
            root: Application root directory
            session: Console session used for status output and prompts
            config: Layout and behaviour settings (defaults if not given)
        """
        self._config = config if config is not None else PortablePatchConfig()
        self._session = session
        self._logger = logging.getLogger("PortablePatcher")

        self.root = Path(root)
        self.app_dir = self.root / self._config.app_dir
        self.target_path = self.app_dir / self._config.target_name
        self.backup_path = self.app_dir / (self._config.target_name + self._config.backup_suffix)
        self.data_dir = self.app_dir / self._config.data_dir_name

    def is_patched(self) -> bool:
        """Check whether the target file carries the patch marker.  Unreadable files count as unpatched."""
        try:
            content = self._read_target()

        except (OSError, UnicodeDecodeError) as e:
            self._logger.debug("Could not read %s: %s", self.target_path, e)
            return False

        return PATCH_MARKER in content

    def has_backup(self) -> bool:
        """Check whether a backup of the original target file exists."""
        return self.backup_path.exists()

    def has_existing_data(self) -> bool:
        """Check whether the data directory exists and has anything in it."""
        return self.data_dir.is_dir() and any(self.data_dir.iterdir())

    def patch_content(self, content: str) -> TextPatchResult:
        """
        Apply the portable mode rules to a buffer.

        Args:
            content: Original main.js text

        Returns:
            TextPatchResult with the patched text

        Raises:
            TextPatchAnchorError: In strict mode, if an anchor is missing
        """
        applier = TextPatchApplier(strict=self._config.strict)
        return applier.apply(content, build_patch_rules())

    def apply_patch(self) -> PortablePatchResult:
        """
        Patch the target file, or offer to revert it if it is already patched.

        Returns:
            PortablePatchResult describing what happened
        """
        self._session.print('[*] Checking application state...', 'cyan')

        try:
            self._check_layout()

        except AppLayoutError as e:
            self._logger.error("Layout check failed: %s", e)
            self._session.print(f'[ERROR] {e}', 'red')
            self._session.print(
                '        Please run this next to the "resources" folder (or pass --root) and try again.',
                'yellow'
            )
            return PortablePatchResult(PortablePatchAction.FAILED, str(e))

        if self.is_patched():
            self._session.print('[INFO] The application is already patched!', 'yellow')
            if self._session.ask('Would you like to revert to the original version', True):
                return self.revert_patch()

            self._logger.info("Already patched, revert declined")
            return PortablePatchResult(PortablePatchAction.CANCELLED, 'Application left patched')

        # A strict failure must leave no backup or data directory behind
        try:
            result = self.patch_content(self._read_target())

        except TextPatchAnchorError as e:
            self._logger.error("Strict patch failed: %s (%s)", e, e.error_details)
            self._session.print(f'[ERROR] {e}', 'red')
            self._session.print(f'        {self._config.target_name} was not modified.', 'yellow')
            return PortablePatchResult(PortablePatchAction.FAILED, str(e))

        self._create_data_dirs()

        if not self.has_backup():
            self._session.print(f'[+] Creating backup of {self._config.target_name}...', 'cyan')
            shutil.copy2(self.target_path, self.backup_path)
            self._logger.info("Created backup: %s", self.backup_path)

        self._session.print('[+] Applying portable mode patch...', 'cyan')

        for rule_name in result.skipped_rules:
            self._session.print(f"[WARNING] Could not find the anchor for '{rule_name}', skipped", 'yellow')

        self._write_target(result.text)
        self._logger.info(
            "Patched %s (applied: %s, skipped: %s)",
            self.target_path, result.applied_rules, result.skipped_rules
        )

        self._session.print('[SUCCESS] Patch applied successfully!', 'green')
        self._session.print(f'[INFO] Data directory: {self.data_dir}', 'bright')
        self._session.print('[INFO] Run script again to revert changes\n', 'bright')
        return PortablePatchResult(
            PortablePatchAction.APPLIED,
            f'Patch applied, data directory: {self.data_dir}',
            skipped_rules=list(result.skipped_rules)
        )

    def revert_patch(self) -> PortablePatchResult:
        """
        Restore the target file from its backup.

        Returns:
            PortablePatchResult describing what happened
        """
        try:
            self._check_backup()

        except BackupMissingError as e:
            self._logger.error("Revert failed: %s", e)
            self._session.print(f'[ERROR] {e}', 'red')
            return PortablePatchResult(PortablePatchAction.FAILED, str(e))

        if self.has_existing_data():
            self._session.print(f'[WARNING] You have data in: {self.data_dir}', 'yellow')
            if not self._session.ask('Keep this data', True):
                self._session.print('[+] Removing data directory...', 'cyan')
                shutil.rmtree(self.data_dir)
                self._logger.info("Removed data directory: %s", self.data_dir)

        self._session.print('[+] Restoring original version...', 'cyan')
        shutil.copy2(self.backup_path, self.target_path)
        self.backup_path.unlink()
        self._logger.info("Restored %s from backup", self.target_path)

        self._session.print('[SUCCESS] Successfully reverted to original version!', 'green')
        return PortablePatchResult(PortablePatchAction.REVERTED, 'Reverted to original version')

    def run(self) -> int:
        """
        Run one patch/revert cycle and close the session.

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        try:
            result = self.apply_patch()

        except KeyboardInterrupt:
            self._session.print('\n[ERROR] Interrupted by user', 'red')
            return 130

        except Exception as e:
            self._logger.exception("Unexpected error while patching %s", self.target_path)
            self._session.print('\n[ERROR] An error occurred:', 'red')
            self._session.print(str(e), 'red')
            return 1

        finally:
            self._session.close()

        return 0 if result.success else 1

    def _check_layout(self) -> None:
        """Make sure the application directory and target file are where we expect."""
        if not self.app_dir.is_dir():
            raise AppLayoutError(
                'This script must be placed in the root directory of EchoAPI!',
                {'app_dir': str(self.app_dir)}
            )

        if not self.target_path.is_file():
            raise AppLayoutError(
                f'Could not find {self.target_path}',
                {'target': str(self.target_path)}
            )

    def _check_backup(self) -> None:
        if not self.has_backup():
            raise BackupMissingError(
                'No backup file found to revert to!',
                {'backup': str(self.backup_path)}
            )

    def _create_data_dirs(self) -> None:
        """Create the data directory and its subdirectories if they don't exist."""
        if not self.data_dir.exists():
            self._session.print('[+] Creating data directory structure...', 'cyan')

        self.data_dir.mkdir(parents=True, exist_ok=True)
        for subdir in self._config.data_subdirs:
            (self.data_dir / subdir).mkdir(parents=True, exist_ok=True)

    def _read_target(self) -> str:
        # newline='' keeps the file's own line endings intact
        with open(self.target_path, 'r', encoding='utf-8', newline='') as f:
            return f.read()

    def _write_target(self, content: str) -> None:
        with open(self.target_path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
