"""
Centralized logging configuration for the Wellness Planner.
Provides component-specific loggers, optionally with separate log files.
"""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import get_config

DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - "
    "%(funcName)s() - %(message)s"
)
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class ComponentLogger:
    """Manages component-specific logging."""

    _loggers: Dict[str, logging.Logger] = {}
    _initialized = False
    _log_dir: Optional[Path] = None
    _unified_handler: Optional[logging.Handler] = None

    # Component definitions with their log levels
    COMPONENTS = {
        "api": {"level": logging.INFO, "file": "api.log"},
        "actions": {"level": logging.INFO, "file": "actions.log"},
        "auth": {"level": logging.INFO, "file": "auth.log"},
        "database": {"level": logging.INFO, "file": "database.log"},
        "main": {"level": logging.INFO, "file": "main.log"},
        "error": {"level": logging.ERROR, "file": "errors.log"},
    }

    @classmethod
    def initialize(cls, log_dir: Optional[str] = None, debug: Optional[bool] = None) -> None:
        """
        Initialize the logging system with component-specific loggers.

        Args:
            log_dir: Directory for log files. Defaults to config.app.log_dir
            debug: Enable debug logging for all components. Defaults to config.server.debug
        """
        if cls._initialized:
            return

        config = get_config()
        if debug is None:
            debug = config.server.debug or config.app.log_level.upper() == "DEBUG"
        to_file = config.app.log_to_file or log_dir is not None

        if to_file:
            base_dir = Path(log_dir or config.app.log_dir)
            # Session-specific subdirectory
            session_dir = datetime.now().strftime("%Y%m%d_%H%M%S")
            cls._log_dir = base_dir / session_dir
            cls._log_dir.mkdir(parents=True, exist_ok=True)

            cls._unified_handler = logging.handlers.RotatingFileHandler(
                cls._log_dir / "unified.log",
                maxBytes=20 * 1024 * 1024,  # 20MB
                backupCount=3,
                encoding="utf-8",
            )
            cls._unified_handler.setFormatter(
                logging.Formatter(DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
            )

        cls._initialized = True

        for component_name, component_config in cls.COMPONENTS.items():
            level = logging.DEBUG if debug else component_config["level"]
            cls._create_component_logger(component_name, level, component_config["file"])

        main_logger = cls._loggers["main"]
        main_logger.info("Wellness Planner logging initialized")
        if cls._log_dir:
            main_logger.info(f"Log directory: {cls._log_dir}")

    @classmethod
    def _create_component_logger(
        cls, component: str, level: int = logging.INFO, filename: Optional[str] = None
    ) -> logging.Logger:
        """Create (or replace) the logger for one component."""
        logger = logging.getLogger(f"wellness.{component}")
        logger.handlers.clear()
        logger.setLevel(level)

        if cls._log_dir is not None:
            logger.propagate = False
            file_handler = logging.handlers.RotatingFileHandler(
                cls._log_dir / (filename or f"{component}.log"),
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(
                logging.Formatter(DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
            )
            logger.addHandler(file_handler)
            if cls._unified_handler is not None:
                logger.addHandler(cls._unified_handler)

            # Errors still reach the console when logging to files
            if component in ("error", "main"):
                console_handler = logging.StreamHandler(sys.stderr)
                console_handler.setLevel(logging.ERROR)
                console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt="%H:%M:%S"))
                logger.addHandler(console_handler)
        else:
            # Console mode: let records propagate to the root/uvicorn handlers
            logger.propagate = True
            if not logging.getLogger().handlers:
                logging.basicConfig(level=level, format=SIMPLE_FORMAT)

        cls._loggers[component] = logger
        return logger

    @classmethod
    def get_logger(cls, component: str) -> logging.Logger:
        """
        Get a logger for a specific component.

        Args:
            component: Component name (api, actions, auth, database, ...)
                      or a module path like 'wellness_planner.services.goals'

        Returns:
            Logger instance for the component
        """
        if not cls._initialized:
            cls.initialize()

        component = cls._component_for(component)
        if component not in cls._loggers:
            cls._create_component_logger(component)
        return cls._loggers[component]

    @staticmethod
    def _component_for(name: str) -> str:
        """Map a module path to its component name."""
        if not name.startswith("wellness_planner"):
            return name

        parts = name.split(".")
        if len(parts) < 2:
            return "main"
        if parts[1] == "services":
            return "actions"
        if parts[1] in ("db", "repositories"):
            return "database"
        if parts[1] in ("api", "auth"):
            return parts[1]
        return "main"

    @classmethod
    def log_exception(
        cls, component: str, exc: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log an exception with context to both the component and error logs.

        Args:
            component: Component where the exception occurred
            exc: The exception to log
            context: Additional context information
        """
        component_logger = cls.get_logger(component)
        error_logger = cls.get_logger("error")

        context_str = ""
        if context:
            context_str = " | Context: " + ", ".join(f"{k}={v}" for k, v in context.items())

        component_logger.error(
            f"Exception in {component}: {type(exc).__name__}: {exc}{context_str}",
            exc_info=exc,
        )
        error_logger.error(f"[{component}] {type(exc).__name__}: {exc}{context_str}")

    @classmethod
    def get_log_directory(cls) -> Optional[Path]:
        """Get the current log directory path."""
        return cls._log_dir

    @classmethod
    def shutdown(cls) -> None:
        """Close handlers and allow re-initialization."""
        for logger in cls._loggers.values():
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
        cls._loggers = {}
        cls._unified_handler = None
        cls._log_dir = None
        cls._initialized = False


# Convenience functions
def get_logger(component: str) -> logging.Logger:
    """Get a logger for a specific component."""
    return ComponentLogger.get_logger(component)


def initialize_logging(log_dir: Optional[str] = None, debug: Optional[bool] = None) -> None:
    """Initialize the logging system."""
    ComponentLogger.initialize(log_dir=log_dir, debug=debug)


def log_exception(component: str, exc: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log an exception with context."""
    ComponentLogger.log_exception(component, exc, context)


def get_log_directory() -> Optional[Path]:
    """Get the current log directory path."""
    return ComponentLogger.get_log_directory()
