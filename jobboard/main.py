"""Main entry point for the Job Board Aggregator service."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import signal
import sys
import threading
import time
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from jobboard.config.environment import EnvironmentConfig
from jobboard.config.exceptions import ConfigurationError
from jobboard.config.loader import load_config
from jobboard.config.models import AppConfig
from jobboard.logging import get_logger
from jobboard.logging.config import configure_logging
from jobboard.persistence.database import close_database, init_database
from jobboard.scheduler import SchedulerService
from jobboard.service import JobService

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and settle the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def run_manual(service: JobService, app_config: AppConfig, query: Optional[str]) -> int:
    """Refresh once, print the first page (or search hits) and stats as JSON.

    Returns:
        0 when the refresh succeeded, 1 otherwise
    """
    logger.info("Executing manual refresh", extra={"event": "service.manual_refresh.starting"})
    result = service.refresh_now()

    limit = app_config.pagination.default_limit
    if query:
        listing: Dict[str, Any] = service.search_jobs(query, limit=limit, offset=0).to_dict()
    else:
        listing = service.get_jobs(limit=limit, offset=0).to_dict()

    output = {
        "refresh": {"ok": result.ok, "attempts": result.attempts},
        "jobs": listing,
        "stats": service.get_stats().to_dict(),
    }
    print(json.dumps(output, indent=2, default=str))

    logger.info(
        f"Manual refresh completed: {listing['total']} jobs in view",
        extra={
            "event": "service.manual_refresh.completed",
            "refresh_ok": result.ok,
            "total": listing["total"],
        },
    )
    return 0 if result.ok else 1


def main() -> int:
    """
    Main entry point for the Job Board Aggregator.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    start_time = time.time()
    parser = argparse.ArgumentParser(
        description="Job Board Aggregator - merges local postings with an external job provider"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml)",
    )
    parser.add_argument(
        "--manual-run",
        action="store_true",
        help="Refresh the external snapshot once, print results and exit",
    )
    parser.add_argument(
        "--query",
        default=None,
        help="Search term for --manual-run output",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )

    args = parser.parse_args()

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.info(
            "Job Board Aggregator starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "manual_run": args.manual_run,
            },
        )

        init_database(env_config.database_url)

        logger.info(
            "Configuration loaded",
            extra={
                "event": "config.loaded",
                "provider_url": app_config.provider.url,
                "refresh_interval_seconds": app_config.refresh_interval_seconds,
                "log_format": app_config.logging.format,
            },
        )

        service = JobService.from_config(app_config, env_config)

        if args.manual_run:
            try:
                return run_manual(service, app_config, args.query)
            finally:
                close_database()
                logger.info(
                    "Job Board Aggregator stopped",
                    extra={
                        "event": "service.stopping",
                        "uptime_seconds": round(time.time() - start_time, 2),
                    },
                )

        shutdown_event = threading.Event()
        scheduler_service = SchedulerService(
            refresh_callable=service.refresh_now,
            interval_seconds=app_config.refresh_interval_seconds,
            shutdown_event=shutdown_event,
        )

        def signal_handler(signum, frame):
            logger.info(
                f"Received signal {signum}, shutting down",
                extra={"event": "service.signal_received", "signal": signum},
            )
            scheduler_service.shutdown(wait=False)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        scheduler_service.start()
        logger.info(
            "Scheduler started. Press Ctrl+C to stop",
            extra={"event": "service.daemon_mode.started"},
        )

        try:
            shutdown_event.wait()
        except KeyboardInterrupt:
            logger.info(
                "Keyboard interrupt received, shutting down",
                extra={"event": "service.keyboard_interrupt"},
            )
            scheduler_service.shutdown(wait=False)

        service.close()
        close_database()
        logger.info(
            "Job Board Aggregator stopped",
            extra={
                "event": "service.stopping",
                "uptime_seconds": round(time.time() - start_time, 2),
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during startup",
            extra={
                "event": "service.startup.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
