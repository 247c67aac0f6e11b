"""
Configuration management for the portable patcher.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import yaml

from portable_patch.portable_patch_exceptions import PortablePatchConfigError


DEFAULT_CONFIG_NAME = "portable-patch.yaml"


@dataclass
class PortablePatchConfig:
    """Layout and behaviour settings for the patcher."""

    app_dir: str = "resources/app"
    target_name: str = "main.js"
    backup_suffix: str = ".backup"
    data_dir_name: str = "data"
    data_subdirs: List[str] = field(default_factory=lambda: ["logs", "crashes", "temp", "cache"])
    strict: bool = False
    log_dir: str = "~/.portable_patch/logs"

    @classmethod
    def load_from_file(cls, config_path: str | Path) -> 'PortablePatchConfig':
        """Load configuration from a YAML file, falling back to defaults for missing keys."""
        if not os.path.exists(config_path):
            raise PortablePatchConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)

        except yaml.YAMLError as e:
            raise PortablePatchConfigError(
                f"Could not parse configuration file {config_path}: {e}",
                {'path': str(config_path)}
            ) from e

        except (OSError, UnicodeDecodeError) as e:
            raise PortablePatchConfigError(
                f"Could not read configuration file {config_path}: {e}",
                {'path': str(config_path)}
            ) from e

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise PortablePatchConfigError(
                f"Configuration file {config_path} must contain a mapping",
                {'path': str(config_path), 'found': type(data).__name__}
            )

        defaults = cls()
        config = cls(
            app_dir=data.get('app_dir', defaults.app_dir),
            target_name=data.get('target_name', defaults.target_name),
            backup_suffix=data.get('backup_suffix', defaults.backup_suffix),
            data_dir_name=data.get('data_dir_name', defaults.data_dir_name),
            data_subdirs=data.get('data_subdirs', defaults.data_subdirs),
            strict=data.get('strict', defaults.strict),
            log_dir=data.get('log_dir', defaults.log_dir)
        )

        errors = config.validate()
        if errors:
            raise PortablePatchConfigError(
                f"Invalid configuration in {config_path}: {'; '.join(errors)}",
                {'path': str(config_path), 'errors': errors}
            )

        return config

    @classmethod
    def load_for_root(cls, root: str | Path, config_path: str | Path | None = None) -> 'PortablePatchConfig':
        """
        Load the configuration that applies to an application root.

        An explicit config path must exist.  Without one, the default config file in
        the root is used if present, otherwise built-in defaults apply.
        """
        if config_path is not None:
            return cls.load_from_file(config_path)

        default_path = Path(root) / DEFAULT_CONFIG_NAME
        if default_path.is_file():
            return cls.load_from_file(default_path)

        return cls()

    def save_to_file(self, config_path: str | Path) -> None:
        """Save configuration to a YAML file."""
        data = {
            'app_dir': self.app_dir,
            'target_name': self.target_name,
            'backup_suffix': self.backup_suffix,
            'data_dir_name': self.data_dir_name,
            'data_subdirs': self.data_subdirs,
            'strict': self.strict,
            'log_dir': self.log_dir
        }

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=True)

    def validate(self) -> List[str]:
        """Validate the configuration and return a list of errors."""
        errors = []

        for name in ('app_dir', 'target_name', 'backup_suffix', 'data_dir_name', 'log_dir'):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                errors.append(f"'{name}' must be a non-empty string")

        if not isinstance(self.data_subdirs, list) or not all(
            isinstance(subdir, str) and subdir for subdir in self.data_subdirs
        ):
            errors.append("'data_subdirs' must be a list of non-empty strings")

        if not isinstance(self.strict, bool):
            errors.append("'strict' must be true or false")

        return errors
