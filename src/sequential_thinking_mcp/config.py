"""Configuration and settings module for Sequential Thinking MCP.

Provides the :class:`ThinkingConfig` class which centralises all configuration
for the thinking server.  Configuration is resolved in priority order:

1. **Environment variables** (highest priority) -- ``DISABLE_THOUGHT_LOGGING``
   and ``SEQUENTIAL_THINKING_*``
2. **Defaults** (lowest priority) -- sensible built-in values

Typical usage::

    config = ThinkingConfig.load()                             # env + defaults
    config = ThinkingConfig(disable_thought_logging=True)      # programmatic

    print(config.disable_thought_logging)   # False  (or overridden value)
    print(config.log_level)                 # "INFO" (or overridden value)
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Toggle that suppresses the boxed stderr rendering of each accepted thought.
# Only the exact value "true" (any case) disables it.
DISABLE_LOGGING_ENV = "DISABLE_THOUGHT_LOGGING"

# Prefix for the remaining server settings, e.g.
# ``SEQUENTIAL_THINKING_LOG_LEVEL=DEBUG``.
ENV_PREFIX = "SEQUENTIAL_THINKING_"

DEFAULT_SERVER_NAME = "sequential-thinking-server"

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class ThinkingConfig(BaseModel):
    """Centralised configuration for the Sequential Thinking server.

    Attributes
    ----------
    disable_thought_logging:
        When *True*, accepted thoughts are not rendered to stderr.  The
        rendering never affects tool responses either way.
    log_level:
        Python logging level name.  One of ``DEBUG``, ``INFO``, ``WARNING``,
        ``ERROR``, ``CRITICAL``.
    server_name:
        Name the MCP server reports during the protocol handshake.
    """

    disable_thought_logging: bool = Field(
        default=False,
        description="Suppress the boxed stderr rendering of accepted thoughts.",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL.",
    )
    server_name: str = Field(
        default=DEFAULT_SERVER_NAME,
        min_length=1,
        description="Server name advertised to MCP clients.",
    )

    @model_validator(mode="after")
    def validate_log_level(self) -> "ThinkingConfig":
        """Normalise and validate the log level string."""
        normalised = self.log_level.upper().strip()
        if normalised not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level '{self.log_level}'. "
                f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}."
            )
        self.log_level = normalised
        return self

    @classmethod
    def load(cls, **overrides) -> "ThinkingConfig":
        """Load configuration with full resolution: explicit -> env -> defaults.

        Keyword arguments take precedence over environment variables, which
        take precedence over the field defaults.
        """
        merged: dict = {}
        merged.update(_load_env_overrides())
        merged.update(overrides)
        return cls.model_validate(merged)

    def configure_logging(self) -> None:
        """Apply the configured log level to the ``sequential_thinking_mcp`` logger.

        Log records always go to stderr: stdout is reserved for the stdio
        transport.  Calling this more than once does not add handlers.
        """
        pkg_logger = logging.getLogger("sequential_thinking_mcp")
        pkg_logger.setLevel(self.log_level)

        if not pkg_logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(self.log_level)
            formatter = logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            handler.setFormatter(formatter)
            pkg_logger.addHandler(handler)

    def to_dict(self) -> dict:
        """Return all configuration values as a plain dictionary."""
        return self.model_dump()

    def __repr__(self) -> str:
        return (
            f"ThinkingConfig("
            f"disable_thought_logging={self.disable_thought_logging}, "
            f"log_level={self.log_level!r}, "
            f"server_name={self.server_name!r}"
            f")"
        )


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _load_env_overrides() -> dict:
    """Read the recognised environment variables and return overrides.

    - ``DISABLE_THOUGHT_LOGGING`` -- ``true`` (case-insensitive) disables the
      stderr rendering; any other value enables it
    - ``SEQUENTIAL_THINKING_LOG_LEVEL`` -- override log_level
    - ``SEQUENTIAL_THINKING_SERVER_NAME`` -- override server_name

    Returns a dict of field_name -> value for any variables that are set.
    """
    overrides: dict = {}

    disable_logging = os.environ.get(DISABLE_LOGGING_ENV)
    if disable_logging is not None:
        overrides["disable_thought_logging"] = disable_logging.lower() == "true"

    log_level = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL")
    if log_level is not None:
        overrides["log_level"] = log_level

    server_name = os.environ.get(f"{ENV_PREFIX}SERVER_NAME")
    if server_name:
        overrides["server_name"] = server_name

    if overrides:
        logger.debug(
            "Environment overrides applied: %s",
            ", ".join(overrides.keys()),
        )

    return overrides
