#!/usr/bin/env python
"""
Run the Costshare API server.

Usage:
    uv run python run_api.py
    uv run python run_api.py --reload            # Development mode
    uv run python run_api.py --log-level debug   # Show per-period delta logs

Warns before starting when the upstream admin API or the Supabase
snapshot backend is not configured; the server still starts so that
/api/health and /api/ready can report the problem.
"""

import argparse
import copy
from typing import Any, Optional

import uvicorn
from rich.console import Console
from uvicorn.config import LOGGING_CONFIG

from shared.config import Settings, get_settings
from shared.database import missing_settings

console = Console(stderr=True)

# Top-level packages whose module loggers should reach the console
APP_LOGGERS = ("api", "modules", "shared")

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def build_log_config(level: str) -> dict[str, Any]:
    """
    Extend uvicorn's logging config with the application's loggers.

    Module loggers share uvicorn's "default" handler and format, so
    billing and upstream logs interleave with server logs.
    """
    config = copy.deepcopy(LOGGING_CONFIG)
    for name in APP_LOGGERS:
        config["loggers"][name] = {
            "handlers": ["default"],
            "level": level.upper(),
            "propagate": False,
        }
    return config


def configuration_warnings(settings: Settings) -> list[str]:
    """Problems that leave the dashboard unable to answer period queries."""
    warnings = []
    if not (settings.base_url and settings.admin_username and settings.admin_password):
        warnings.append("Upstream admin API not configured (BASE_URL, ADMIN_USERNAME, ADMIN_PASSWORD)")
    if settings.snapshot_backend == "supabase":
        missing = missing_settings(settings)
        if missing:
            warnings.append(f"SNAPSHOT_BACKEND=supabase but {', '.join(missing)} not set")
    else:
        warnings.append("SNAPSHOT_BACKEND=memory: period history is lost on restart")
    return warnings


def main(argv: Optional[list[str]] = None):
    parser = argparse.ArgumentParser(description="Run Costshare API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Override LOG_LEVEL")
    args = parser.parse_args(argv)

    settings = get_settings()
    log_level = args.log_level or settings.log_level

    for warning in configuration_warnings(settings):
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=log_level,
        log_config=build_log_config(log_level),
    )


if __name__ == "__main__":
    main()
