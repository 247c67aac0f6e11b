"""
CLI entry point for the portable patcher.

This allows the tool to be run as:
    python -m portable_patch
"""

import sys

from portable_patch.portable_patch_cli import main

if __name__ == "__main__":
    sys.exit(main())
