#!/usr/bin/env python3
"""
Route optimizer CLI - Minimal entry point.

All configuration is specified in YAML files.

Usage:
    python3 optimize_cli.py run_config.yaml
    python3 optimize_cli.py --config run_config.yaml [--verbose]
    python3 optimize_cli.py --help

Examples:
    python3 optimize_cli.py examples/route_run.yaml
    python3 optimize_cli.py examples/seats_run.yaml
"""

import sys
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from route_ga.cli import main  # noqa: E402

if __name__ == '__main__':
    sys.exit(main())
