"""
Configuration management for Swap SDK

Settings come from environment variables, optionally seeded from a .env
file found from the current working directory. Includes an opt-in logging
setup for applications embedding the SDK.
"""

import os
import logging
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Optional, TypeVar

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://170.75.162.89:3333"
DEFAULT_DEX_ID = "INVARIANT"

T = TypeVar("T")


def _load_env_file():
    """Seed os.environ from the nearest .env; real environment wins"""
    env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file, override=False)


_load_env_file()


def _flag(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes", "on")


def _env(key: str, default: T, parse: Optional[Callable[[str], T]] = None) -> T:
    """
    Read one setting from the environment

    Unset keys yield ``default``. With ``parse``, a value that fails to parse
    is logged and replaced by ``default`` so a typo never breaks import.
    """
    value = os.getenv(key)
    if value is None:
        return default
    if parse is None:
        return value
    try:
        return parse(value)
    except ValueError:
        logger.warning(f"Ignoring {key}={value!r}: not a valid {parse.__name__}, using {default!r}")
        return default


@dataclass
class SwapApiConfig:
    """Swap route API configuration"""
    base_url: str = field(default_factory=lambda: _env("SWAP_API_BASE_URL", DEFAULT_BASE_URL))
    timeout: float = field(default_factory=lambda: _env("SWAP_API_TIMEOUT", 30.0, float))
    # Default dexId of new SwapQuoteRequests; forwarded as-is
    dex_id: str = field(default_factory=lambda: _env("SWAP_DEX_ID", DEFAULT_DEX_ID))


@dataclass
class RpcConfig:
    """Solana RPC connection configuration"""
    url: str = field(default_factory=lambda: _env("SOLANA_RPC_URL", ""))
    timeout_seconds: float = field(default_factory=lambda: _env("SOLANA_RPC_TIMEOUT", 30.0, float))
    commitment: str = field(default_factory=lambda: _env("SOLANA_RPC_COMMITMENT", "confirmed"))


@dataclass
class LoggingConfig:
    """
    Logging configuration used by setup_logging

    Environment variables:
        LOG_FILE: Path to log file (empty disables file output)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)
    """
    log_file: str = field(default_factory=lambda: _env("LOG_FILE", ""))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    console_output: bool = field(default_factory=lambda: _env("LOG_CONSOLE", True, _flag))
    max_bytes: int = field(default_factory=lambda: _env("LOG_MAX_BYTES", 10 * 1024 * 1024, int))
    backup_count: int = field(default_factory=lambda: _env("LOG_BACKUP_COUNT", 5, int))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@dataclass
class Config:
    """
    Main configuration container

    Usage:
        from swap_sdk.config import get_config

        print(get_config().api.base_url)
        print(get_config().rpc.commitment)
    """
    api: SwapApiConfig = field(default_factory=SwapApiConfig)
    rpc: RpcConfig = field(default_factory=RpcConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def reload(cls) -> "Config":
        """Re-read .env and environment"""
        _load_env_file()
        return cls()


# Global config instance
config = Config()


def get_config() -> Config:
    """Current global configuration (follows reload_config)"""
    return config


def reload_config() -> Config:
    """Rebuild the global configuration from the environment"""
    global config
    config = Config.reload()
    return config


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "swap_sdk",
) -> logging.Logger:
    """
    Attach handlers to the SDK logger

    The SDK never configures logging on its own; applications call this to
    route ``swap_sdk.*`` records to a rotating file and/or the console.
    Calling it again replaces the previously attached handlers.

    Args:
        log_config: Logging configuration (uses global config if None)
        logger_name: Logger to configure (default: swap_sdk)

    Returns:
        Configured logger instance

    Example:
        from swap_sdk.config import LoggingConfig, setup_logging
        setup_logging(LoggingConfig(log_file="logs/swap.log", log_level="DEBUG"))
    """
    log_config = log_config or get_config().logging
    sdk_logger = logging.getLogger(logger_name)
    sdk_logger.setLevel(log_config.level)

    for handler in sdk_logger.handlers[:]:
        handler.close()
        sdk_logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.log_format)

    if log_config.log_file:
        Path(log_config.log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        sdk_logger.addHandler(file_handler)

    if log_config.console_output:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        sdk_logger.addHandler(console_handler)

    sdk_logger.debug(f"Logging initialized: file={log_config.log_file or '-'}, level={log_config.log_level}")
    return sdk_logger
