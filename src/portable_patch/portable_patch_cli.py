"""
Command-line interface for the portable patcher.

Usage:
    portable-patch [options]
    python -m portable_patch [options]

Run with no arguments from the EchoAPI install directory (the one holding the
"resources" folder).  The first run patches the application; running again
offers to revert it.
"""

import argparse
from datetime import datetime, timezone
import glob
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import List

from portable_patch.portable_patch_config import PortablePatchConfig
from portable_patch.portable_patch_exceptions import PortablePatchConfigError
from portable_patch.portable_patch_session import PatchSession
from portable_patch.portable_patcher import PortablePatcher


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
MAX_LOG_FILES = 50


def setup_logging(log_dir: str, verbose: bool = False) -> None:
    """
    Send log records to a fresh timestamped file in log_dir.

    Raises:
        OSError: If the log directory or file cannot be created
    """
    log_dir = os.path.expanduser(log_dir)
    os.makedirs(log_dir, exist_ok=True)

    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S-%f")[:23]
    handlers: List[logging.Handler] = [
        RotatingFileHandler(
            os.path.join(log_dir, f"{stamp}.log"),
            maxBytes=1024*1024,
            backupCount=MAX_LOG_FILES - 1,
            encoding='utf-8'
        )
    ]

    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, handlers=handlers)
    cleanup_old_logs(log_dir, max_logs=MAX_LOG_FILES)


def setup_fallback_logging(verbose: bool = False) -> None:
    """Log to stderr when verbose, otherwise discard records."""
    handler: logging.Handler = logging.StreamHandler(sys.stderr) if verbose else logging.NullHandler()
    logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, handlers=[handler])


def cleanup_old_logs(log_dir: str, max_logs: int) -> None:
    """Delete the oldest log files beyond max_logs."""
    log_files = sorted(glob.glob(os.path.join(log_dir, "*.log*")), key=os.path.getctime)

    for stale in log_files[:max(0, len(log_files) - max_logs)]:
        try:
            os.remove(stale)

        except OSError as e:
            logging.getLogger("PortablePatchCLI").debug("Could not remove old log %s: %s", stale, e)


def parse_arguments(argv: List[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Make EchoAPI portable, or revert it to the original version",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Patch (or revert) the installation in the current directory
  portable-patch

  # Patch an installation somewhere else
  portable-patch --root "C:/Tools/EchoAPI"

  # Refuse to write a partially patched main.js
  portable-patch --strict
        """
    )

    parser.add_argument(
        '--root',
        default=os.getcwd(),
        help='EchoAPI install directory containing "resources" (default: current directory)'
    )

    parser.add_argument(
        '--config',
        help='YAML configuration file (default: portable-patch.yaml in the root, if present)'
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help='Abort without writing if any anchor is missing from main.js'
    )

    parser.add_argument(
        '--log-dir',
        help='Directory for log files (overrides the configuration)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Also write log output to stderr'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output'
    )

    return parser.parse_args(argv)


def main(argv: List[str] | None = None, session: PatchSession | None = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    if session is None:
        session = PatchSession(use_color=False if args.no_color else None)

    try:
        config = PortablePatchConfig.load_for_root(args.root, args.config)

    except PortablePatchConfigError as e:
        session.print(f'[ERROR] {e}', 'red')
        session.close()
        return 1

    if args.strict:
        config.strict = True

    if args.log_dir:
        config.log_dir = args.log_dir

    try:
        setup_logging(config.log_dir, args.verbose)

    except OSError as e:
        setup_fallback_logging(args.verbose)
        session.print(f'[WARNING] Could not write log files to {config.log_dir}: {e}', 'yellow')

    logging.getLogger("PortablePatchCLI").info("Starting in %s (strict=%s)", args.root, config.strict)

    session.print('\n=== EchoAPI Portable Patcher ===', 'bright')
    session.print('Makes EchoAPI portable or reverts changes.\n', 'cyan')

    patcher = PortablePatcher(args.root, session, config)
    return patcher.run()


if __name__ == "__main__":
    sys.exit(main())
