"""Run a script or module with error hooks configured before its first line.

Usage:
    error-visibility --debug app.py arg1 arg2
    error-visibility --production -m package.module
    ERROR_VISIBILITY_DEBUG=1 python -m error_visibility app.py

Without ``--debug``/``--production`` the mode comes from
``ERROR_VISIBILITY_DEBUG`` (unset means production).

Exit codes:
    0 - Target completed normally
    1 - Target raised an uncaught exception
"""

from __future__ import annotations

import argparse
import runpy
import sys
from collections.abc import Sequence
from pathlib import Path

from error_visibility.bootstrap import configure, debug_from_env


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog='error-visibility',
        description='Run a Python script with debug or production error reporting.',
        epilog='Example: %(prog)s --debug app.py --port 8080',
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '--debug',
        dest='debug',
        action='store_true',
        help='Print converted errors, stack traces and fatal errors',
    )
    mode.add_argument(
        '--production',
        dest='debug',
        action='store_false',
        help='Silence all error output',
    )
    parser.set_defaults(debug=None)
    parser.add_argument(
        '-m',
        dest='as_module',
        action='store_true',
        help='Treat TARGET as a module name instead of a file path',
    )
    parser.add_argument('target', metavar='TARGET', help='Script path (or module name with -m)')
    parser.add_argument('args', nargs=argparse.REMAINDER, help='Arguments passed to the target')

    args = parser.parse_args(argv)
    debug = args.debug if args.debug is not None else debug_from_env()

    configure(debug)

    sys.argv = [args.target, *args.args]
    if args.as_module:
        runpy.run_module(args.target, run_name='__main__', alter_sys=True)
    else:
        sys.path.insert(0, str(Path(args.target).resolve().parent))
        runpy.run_path(args.target, run_name='__main__')
    return 0
