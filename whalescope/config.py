"""Configuration module for the WhaleScope server."""

# Standard library imports
import logging
import os
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, List, Optional

# Third-party library imports
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000


def get_env_var(key: str, default: Any = None, required: bool = False,
                validator: Optional[Callable[[str], Any]] = None) -> Any:
    """Get and validate environment variable.

    Args:
        key: Environment variable name
        default: Default value if not present
        required: If True, raises ValueError when not found
        validator: Optional validation function

    Returns:
        The environment variable value or default

    Raises:
        ValueError: If required and not found, or fails validation
    """
    value = os.environ.get(key)

    if value is None or value == "":
        if required:
            raise ValueError(f"Required environment variable '{key}' not found")
        return default

    if validator:
        try:
            return validator(value)
        except Exception as e:
            raise ValueError(f"Invalid value for environment variable '{key}': {str(e)}")

    return value


def bool_validator(value: str) -> bool:
    """Convert a string to boolean."""
    return value.lower() in ("true", "1", "yes", "y", "on")


def int_validator(value: str) -> int:
    """Validate and convert string to integer.

    Raises:
        ValueError: If not a valid integer
    """
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid integer")


def float_validator(value: str) -> float:
    """Validate and convert string to float.

    Raises:
        ValueError: If not a valid number
    """
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid number")


def url_validator(value: str) -> str:
    """Validate URL format.

    Args:
        value: URL to validate

    Returns:
        The validated URL without a trailing slash

    Raises:
        ValueError: If not a valid URL format
    """
    url_pattern = re.compile(
        r'^(https?):\/\/'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+(?:[A-Z]{2,6}\.?|[A-Z0-9-]{2,}\.?)|'  # domain
        r'localhost|'  # localhost
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # or IPv4
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)

    if not url_pattern.match(value):
        raise ValueError(f"'{value}' is not a valid URL")
    return value.rstrip("/")


def log_level_validator(value: str) -> str:
    """Validate log level.

    Raises:
        ValueError: If not a valid log level
    """
    valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    upper_value = value.upper()
    if upper_value not in valid_levels:
        raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
    return upper_value


def environment_validator(value: str) -> str:
    """Validate environment name.

    Raises:
        ValueError: If not a valid environment name
    """
    valid_environments = ("development", "test", "staging", "production")
    if value.lower() not in valid_environments:
        raise ValueError(f"Environment must be one of: {', '.join(valid_environments)}")
    return value.lower()


@dataclass
class HeliusConfig:
    """Configuration for the Helius REST and RPC endpoints."""

    api_key: str = ""
    api_url: str = "https://api.helius.xyz/v0"
    rpc_url: str = "https://mainnet.helius-rpc.com"
    timeout: float = 30.0  # seconds

    @property
    def has_api_key(self) -> bool:
        """Check whether upstream credentials are configured.

        Returns:
            True if an API key is set, False otherwise
        """
        return bool(self.api_key)


@lru_cache()
def get_helius_config() -> HeliusConfig:
    """Get Helius configuration from environment variables.

    Returns:
        HeliusConfig instance

    Raises:
        ValueError: If environment variables fail validation
    """
    return HeliusConfig(
        api_key=get_env_var("HELIUS_API_KEY", ""),
        api_url=get_env_var("HELIUS_API_URL", "https://api.helius.xyz/v0",
                            validator=url_validator),
        rpc_url=get_env_var("HELIUS_RPC_URL", "https://mainnet.helius-rpc.com",
                            validator=url_validator),
        timeout=get_env_var("HELIUS_TIMEOUT", 30.0, validator=float_validator),
    )


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    enable_request_logging: bool = True

    @property
    def bind_address(self) -> str:
        """Get the bind address for the server."""
        return f"{self.host}:{self.port}"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.environment not in ("development", "test", "staging", "production"):
            raise ValueError(f"Invalid environment: {self.environment}")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log_level: {self.log_level}")

        if self.port <= 0 or self.port > 65535:
            raise ValueError(f"Invalid port: {self.port}")


@lru_cache()
def get_server_config() -> ServerConfig:
    """Get server configuration from environment variables.

    Returns:
        ServerConfig instance

    Raises:
        ValueError: If environment variables fail validation
    """
    environment = get_env_var("ENVIRONMENT", "development", validator=environment_validator)
    return ServerConfig(
        host=get_env_var("HOST", "0.0.0.0"),
        port=get_env_var("PORT", 3000, validator=int_validator),
        debug=get_env_var("DEBUG", False, validator=bool_validator),
        environment=environment,
        log_level=get_env_var("LOG_LEVEL", "INFO", validator=log_level_validator),
        cors_origins=[origin.strip() for origin in get_env_var("CORS_ORIGINS", "*").split(",")],
        enable_request_logging=environment != "test",
    )


@dataclass(frozen=True)
class WhaleConfig:
    """Thresholds for whale qualification and pattern detection."""

    min_whale_holdings_usd: float = 100_000
    min_movement_usd: float = 10_000
    pattern_window_ms: int = DAY_MS
    min_pattern_tx_count: int = 3


DEFAULT_WHALE_CONFIG = WhaleConfig()


@lru_cache()
def get_whale_config() -> WhaleConfig:
    """Get whale thresholds, allowing environment overrides of the defaults."""
    return WhaleConfig(
        min_whale_holdings_usd=get_env_var(
            "WHALE_MIN_HOLDINGS_USD", DEFAULT_WHALE_CONFIG.min_whale_holdings_usd,
            validator=float_validator),
        min_movement_usd=get_env_var(
            "WHALE_MIN_MOVEMENT_USD", DEFAULT_WHALE_CONFIG.min_movement_usd,
            validator=float_validator),
        pattern_window_ms=get_env_var(
            "WHALE_PATTERN_WINDOW_MS", DEFAULT_WHALE_CONFIG.pattern_window_ms,
            validator=int_validator),
        min_pattern_tx_count=get_env_var(
            "WHALE_MIN_PATTERN_TX_COUNT", DEFAULT_WHALE_CONFIG.min_pattern_tx_count,
            validator=int_validator),
    )


def validate_config(helius: Optional[HeliusConfig] = None) -> List[str]:
    """Report missing settings that degrade the service.

    Args:
        helius: Helius configuration to check, defaults to the environment one

    Returns:
        Names of the missing environment variables
    """
    helius = helius or get_helius_config()
    missing = []

    if not helius.has_api_key:
        missing.append("HELIUS_API_KEY")

    if missing:
        logger.warning(f"Missing environment variables: {', '.join(missing)}")
        logger.warning("Serving mock data where live data is unavailable. See .env.example for setup.")

    return missing
