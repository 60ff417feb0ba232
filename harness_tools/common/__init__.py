"""
================================================================================
Harness Tools Common Utilities
================================================================================

Shared configuration management and logging setup for the storefront
end-to-end harness.

Exports:
    - GlobalConfig: Singleton configuration manager
    - get_config / set_config / reset_config: Convenience accessors
    - init_logger: Initialize loguru with the standard sinks
    - trace: Print a highlighted block of output for step debugging

Usage:
    from harness_tools.common import get_config, init_logger

    init_logger()
    timeout = get_config("harness.default_timeout_ms", 10000)

================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Repository root (harness_tools/common/__init__.py -> repo)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# ============================================================
# Configuration Management
# ============================================================

# Environment variables mapped onto dot-notation config keys
ENV_MAPPING: Dict[str, str] = {
    "HARNESS_BROWSER": "harness.browser",
    "HARNESS_HEADLESS": "harness.headless",
    "HARNESS_DEFAULT_TIMEOUT": "harness.default_timeout_ms",
    "HARNESS_POLL_INTERVAL": "harness.poll_interval_ms",
    "HARNESS_TEARDOWN": "harness.teardown_strategy",
    "HARNESS_REMOTE_ENDPOINT": "harness.remote_endpoint",
    "HARNESS_REPORTS_DIR": "harness.reports_dir",
    "LOG_LEVEL": "logging.level",
    "LOG_FILE": "logging.file",
}


def _default_config() -> Dict[str, Any]:
    """Returns the built-in configuration used when no YAML file is found."""
    return {
        "logging": {
            "level": "INFO",
        },
        "harness": {
            "browser": "chromium",
            "headless": True,
            "default_timeout_ms": 10000,
            "poll_interval_ms": 200,
            "root_marker": "body",
            "teardown_strategy": "always",
            "screenshot_on_failure": True,
            "reports_dir": "reports",
        },
        "sites": {
            "mammoth_workwear": {"url": "http://mammothworkwear.com"},
            "google_search": {"url": "http://www.google.com"},
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class GlobalConfig:
    """
    Singleton class to manage the harness configuration.

    Loading order (later wins):
        1. Built-in defaults
        2. config/config.yaml (current directory, then repository root)
        3. config/{ENVIRONMENT}.yaml when present
        4. Mapped environment variables (see ENV_MAPPING)
        5. SECTION__KEY environment variables (HARNESS__ROOT_MARKER=html)
    """
    _instance: Optional["GlobalConfig"] = None
    _initialized: bool = False

    def __new__(cls) -> "GlobalConfig":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._config: Dict[str, Any] = {}
        self._load_configs()
        self._initialized = True

    def _find_config_dir(self) -> Optional[Path]:
        for candidate in (Path("config"), PROJECT_ROOT / "config"):
            if candidate.is_dir():
                return candidate
        return None

    def _load_configs(self) -> None:
        """
        Loads configurations from YAML files and environment variables.
        """
        self._config = _default_config()

        config_dir = self._find_config_dir()
        if config_dir is None:
            logger.debug("No configuration directory found. Using defaults.")
        else:
            env = os.getenv("ENVIRONMENT", os.getenv("ENV", ""))
            candidates = [config_dir / "config.yaml"]
            if env:
                candidates.append(config_dir / f"{env}.yaml")

            for config_path in candidates:
                if not config_path.exists():
                    continue
                with open(config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
                self._config = _deep_merge(self._config, file_config)
                logger.debug(f"Loaded configuration from {config_path}")

        for env_key, config_key in ENV_MAPPING.items():
            if env_key in os.environ:
                self._set_nested(config_key, os.environ[env_key])

        for env_key, value in os.environ.items():
            if "__" in env_key and not env_key.startswith("_"):
                self._set_nested(".".join(p.lower() for p in env_key.split("__")), value)

    def _set_nested(self, key: str, value: Any) -> None:
        """
        Sets a nested configuration value using dot notation.
        """
        keys = key.split(".")
        current = self._config
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                current[k] = {}
            current = current[k]
        current[keys[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieves a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "harness.browser")
            default: Default value if key is not found

        Returns:
            Configuration value or default
        """
        value = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Sets a configuration value.
        """
        self._set_nested(key, value)

    def get_all(self) -> Dict[str, Any]:
        """
        Returns the entire configuration dictionary.
        """
        return self._config.copy()

    @classmethod
    def reset(cls) -> None:
        """
        Drop the singleton so the next access reloads files and environment.
        """
        cls._instance = None
        cls._initialized = False


def get_config(key: str, default: Any = None) -> Any:
    """
    Convenience function to get a configuration value.

    Example:
        browser = get_config("harness.browser", "chromium")
    """
    return GlobalConfig().get(key, default)


def set_config(key: str, value: Any) -> None:
    """
    Convenience function to set a configuration value.
    """
    GlobalConfig().set(key, value)


def reset_config() -> None:
    """Forget loaded configuration (used by tests)."""
    GlobalConfig.reset()


# ============================================================
# Logging Setup
# ============================================================

_logger_initialized = False

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def init_logger(
    level: str = None,
    format_string: str = None,
    log_file: str = None
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="reports/harness.log")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    logger.remove()

    level = str(level or get_config("logging.level", "INFO")).upper()
    format_string = format_string or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or get_config("logging.file")
    if log_file:
        ensure_directory(os.path.dirname(log_file) or ".")
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


def trace(*args: Any) -> None:
    """
    Print values in a highlighted block so they stand out in step output.

    Example:
        trace("cart total", total)
    """
    text = ", ".join(str(a) for a in args)
    logger.opt(colors=True).info(
        "<bg blue><yellow>\n >>>>> \n{}\n <<<<< </yellow></bg blue>", text
    )


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: str) -> str:
    """
    Ensures a directory exists, creating it if necessary.

    Returns:
        The path (for chaining)
    """
    os.makedirs(path, exist_ok=True)
    return path


__all__ = [
    "GlobalConfig",
    "get_config",
    "set_config",
    "reset_config",
    "init_logger",
    "trace",
    "ensure_directory",
    "PROJECT_ROOT",
]
