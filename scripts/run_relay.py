#!/usr/bin/env python3
"""
Run the relay API with uvicorn.

  python scripts/run_relay.py
  python scripts/run_relay.py --port 3000 --reload
  python scripts/run_relay.py --mock       # no Vicidial / GoHighLevel calls
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

import uvicorn

from src.utils.config_loader import load_relay_config, validate_config


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the Vicidial / GoHighLevel relay")
    parser.add_argument("--host", default=None, help="Bind host (default: HOST or config)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: PORT or config)")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    parser.add_argument("--mock", action="store_true", help="Use mock downstream clients")
    parser.add_argument("--check", action="store_true", help="Validate configuration and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    if args.mock:
        os.environ["INTEGRATIONS_MODE"] = "mock"

    cfg = load_relay_config()
    errors = validate_config(cfg)
    for error in errors:
        logging.warning("Config: %s", error)
    if args.check:
        return 1 if errors else 0

    uvicorn.run(
        "src.api.main:app",
        host=args.host or cfg.server.host,
        port=args.port or cfg.server.port,
        reload=args.reload,
        log_level="debug" if args.verbose else cfg.server.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
