from __future__ import annotations

import argparse
import logging
import os
import time
from logging.handlers import RotatingFileHandler

from folder_watcher import ConfigurationError, FileProcessor
from folder_watcher import config as cfg
from folder_watcher.paths import ensure_dir, resolve_path


def setup_logger(logfile: str, level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger("folder_watcher")
    logger.setLevel(level)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")

    # Rotating file handler to avoid unbounded log growth
    handler = RotatingFileHandler(logfile, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Also log to console for immediate feedback
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    return logger


DEFAULT_LOG_DIR = os.path.join("{LocalApplicationData}", "FolderWatcher", "Logs")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Poll a folder and route matching files by name")
    parser.add_argument("--path", "-p", help="Folder to watch (FOLDER_TO_WATCH)")
    parser.add_argument("--processing", help="Destination for normal files (PROCESSING_FOLDER)")
    parser.add_argument("--error", help="Destination for malformed files (ERROR_FOLDER)")
    parser.add_argument("--pattern", help=f"Glob applied during scan (default {cfg.DEFAULT_FILE_PATTERN})")
    parser.add_argument("--interval", type=float, help="Minutes between scans (default 1)")
    parser.add_argument(
        "--logdir", "-l",
        default=DEFAULT_LOG_DIR,
        help=f"Directory to write logs to (default {DEFAULT_LOG_DIR})"
    )
    parser.add_argument("--env-file", default=".env", help="Optional .env file with settings")
    parser.add_argument("--events", action="store_true", help="Also scan as soon as a new file appears")
    parser.add_argument("--once", action="store_true", help="Run a single scan and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug messages")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> cfg.ConfigProvider:
    overrides = {
        cfg.FOLDER_TO_WATCH: args.path,
        cfg.PROCESSING_FOLDER: args.processing,
        cfg.ERROR_FOLDER: args.error,
        cfg.FILE_PATTERN: args.pattern,
        cfg.PROCESS_FILES_INTERVAL: args.interval,
        cfg.SCAN_ON_FILE_EVENTS: "true" if args.events else None,
    }
    env_file = args.env_file if args.env_file and os.path.isfile(args.env_file) else None
    return cfg.LayeredConfig([cfg.DictConfig(overrides), cfg.EnvConfig(env_file=env_file)])


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = build_config(args)

    log_dir = os.path.abspath(resolve_path(args.logdir))
    ensure_dir(log_dir)
    logfile = os.path.join(log_dir, "folder_watcher.log")
    logger = setup_logger(logfile, logging.DEBUG if args.verbose else logging.INFO)

    logger.info("Logging to: %s", logfile)
    processor = FileProcessor(config, logger=logger)

    try:
        if args.once:
            processor.run_cycle()
            return 0
        processor.start()
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutdown requested")
    processor.stop()
    logger.info("Stopped")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
