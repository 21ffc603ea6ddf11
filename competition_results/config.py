"""
Server configuration.

Values come from the command line; validation happens on construction.
"""

from dataclasses import dataclass

from .exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    debug: bool = False
    log_file: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.host:
            raise ConfigurationError("host cannot be empty")
        if not (1 <= self.port <= 65535):
            raise ConfigurationError(f"port must be between 1 and 65535, got {self.port}")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level}"
            )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
