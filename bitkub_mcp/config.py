"""Configuration for the Bitkub MCP server"""

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Optional

import structlog
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Configuration
BITKUB_API_URL = os.getenv("BITKUB_API_URL", "https://api.bitkub.com")
API_TIMEOUT = float(os.getenv("BITKUB_API_TIMEOUT", "30"))

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SERVER_NAME = "bitkub-mcp"
SERVER_VERSION = "1.0.0"


@dataclass(frozen=True)
class BitkubCredentials:
    """API key and secret for signed endpoints.

    Immutable: a different key pair means a different client instance.
    """

    api_key: str = field(repr=False)
    secret_key: str = field(repr=False)

    @property
    def is_complete(self) -> bool:
        return bool(self.api_key) and bool(self.secret_key)

    def __repr__(self) -> str:
        state = "configured" if self.is_complete else "incomplete"
        return f"BitkubCredentials(<{state}>)"


@dataclass
class ServerConfig:
    """Runtime settings for the MCP server.

    Use from_env() to pick up environment variable overrides.
    """

    credentials: Optional[BitkubCredentials] = None
    base_url: str = "https://api.bitkub.com"
    timeout: float = 30.0
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    otlp_endpoint: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load config from the environment.

        Environment variables:
            BITKUB_API_KEY / BITKUB_SECRET_KEY: credentials (both required)
            BITKUB_API_URL: Override base_url
            BITKUB_API_TIMEOUT: Override timeout in seconds (default: 30)
            HOST / PORT: HTTP listener address (default: 0.0.0.0:3000)
            LOG_LEVEL: Log level (default: INFO)
            OTLP_ENDPOINT: Enable OTLP trace export
        """
        return cls(
            credentials=credentials_from_values(
                os.getenv("BITKUB_API_KEY"), os.getenv("BITKUB_SECRET_KEY")
            ),
            base_url=os.getenv("BITKUB_API_URL", BITKUB_API_URL),
            timeout=float(os.getenv("BITKUB_API_TIMEOUT", str(API_TIMEOUT))),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", LOG_LEVEL),
            otlp_endpoint=os.getenv("OTLP_ENDPOINT") or None,
        )

    @property
    def has_credentials(self) -> bool:
        return self.credentials is not None and self.credentials.is_complete


def credentials_from_values(
    api_key: Optional[str], secret_key: Optional[str]
) -> Optional[BitkubCredentials]:
    """Build credentials only when both values are non-empty"""
    if not api_key or not secret_key:
        return None
    return BitkubCredentials(api_key=api_key, secret_key=secret_key)


def setup_logging(level: str = LOG_LEVEL):
    """Configure logging - JSON to stderr, stdout stays clean for JSON-RPC"""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers
    root_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(stderr_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
