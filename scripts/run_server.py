#!/usr/bin/env python3
"""Standalone status server: GET /api/status (DHCP leases + IPv6 neighbors by MAC).

Usage: python scripts/run_server.py [config.yaml] [--debug]
Config path falls back to $NETSTATUS_CONFIG, config/config.yaml, then config/config.yaml.example."""

import logging
import os
import sys

# Project root: always resolve relative to script location, not cwd
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _PROJECT_ROOT)
os.chdir(_PROJECT_ROOT)


def main() -> None:
    debug = "--debug" in sys.argv[1:]
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        level=logging.DEBUG if debug else logging.INFO,
    )
    from netstatus.config.settings import read_config
    from netstatus.status_server.app import run_server

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    config_path = args[0] if args else None
    if config_path and not os.path.isabs(config_path):
        config_path = os.path.join(_PROJECT_ROOT, config_path)
    config, resolved = read_config(config_path)
    logging.getLogger(__name__).info("Config: %s", resolved)
    run_server(config)


if __name__ == "__main__":
    main()
