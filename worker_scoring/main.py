"""Main entry point for the Worker Scoring Service."""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

import uvicorn
from dotenv import load_dotenv

from worker_scoring.api import create_app
from worker_scoring.config.environment import EnvironmentConfig
from worker_scoring.config.exceptions import ConfigurationError
from worker_scoring.config.loader import load_config, validate_config_file
from worker_scoring.config.models import AppConfig
from worker_scoring.logging import get_logger
from worker_scoring.logging.config import configure_logging

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path],
    log_level_override: Optional[str] = None,
    host_override: Optional[str] = None,
    port_override: Optional[int] = None,
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and apply overrides.

    Priority for log level, log format, host and port:
    CLI flag > environment variable > config file > default.

    Args:
        config_path: Path to configuration file (None to use default locations)
        log_level_override: Log level from CLI
        host_override: Bind host from CLI
        port_override: Bind port from CLI

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with overrides folded into AppConfig

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    server = app_config.server.model_copy(
        update={
            "host": host_override or env_config.host or app_config.server.host,
            "port": port_override or env_config.port or app_config.server.port,
        }
    )
    logging_config = app_config.logging.model_copy(
        update={
            "level": log_level_override or env_config.log_level or app_config.logging.level,
            "format": env_config.log_format or app_config.logging.format,
        }
    )
    app_config = app_config.model_copy(update={"server": server, "logging": logging_config})

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Worker Scoring Service - binary job/worker qualification scoring over HTTP"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml if present)",
    )
    parser.add_argument("--host", default=None, help="Interface to bind (overrides config and environment)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (overrides config and environment)")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate the configuration file and exit",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the Worker Scoring Service.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    load_dotenv()
    start_time = time.time()
    args = build_parser().parse_args(argv)

    if args.validate_config:
        if args.config is None:
            print("--validate-config requires --config", file=sys.stderr)
            return 2
        return 0 if validate_config_file(args.config) else 1

    try:
        app_config, env_config = load_runtime_config(
            args.config, args.log_level, args.host, args.port
        )

        configure_logging(
            level=app_config.logging.level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.info(
            "Worker Scoring Service starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "host": app_config.server.host,
                "port": app_config.server.port,
                "log_level": app_config.logging.level,
                "auth_enabled": env_config.auth_enabled,
            },
        )

        app = create_app(app_config, env_config)

        # log_config=None keeps uvicorn's loggers on our root handler
        uvicorn.run(
            app,
            host=app_config.server.host,
            port=app_config.server.port,
            log_config=None,
        )

        logger.info(
            "Worker Scoring Service stopped",
            extra={
                "event": "service.stopping",
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        try:
            logger.error(
                f"Configuration error: {e}",
                extra={"event": "config.error", "error_type": "ConfigurationError"},
            )
        except Exception:
            pass
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        try:
            logger.critical(
                "Fatal error during startup",
                extra={
                    "event": "service.startup.failed",
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
                exc_info=True,
            )
        except Exception:
            pass
        return 1


if __name__ == "__main__":
    sys.exit(main())
