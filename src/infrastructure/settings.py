"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

from src.infrastructure.logging.logger import get_app_logger

DEFAULT_CURRENCY = "EUR"
DEFAULT_MAX_RECORDS = 50000
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class FiscalSettings:
    """Runtime settings for the fiscal engine.

    Attributes:
        currency: Reporting currency code.
        cache_enabled: Whether computed summaries are cached in-process.
        cache_ttl_seconds: Cache entry lifetime; ``0`` disables expiry.
        max_records: Soft limit on records per user; exceeding it warns.
    """

    currency: str = DEFAULT_CURRENCY
    cache_enabled: bool = True
    cache_ttl_seconds: int = 0
    max_records: int = DEFAULT_MAX_RECORDS

    @classmethod
    def from_env(cls) -> "FiscalSettings":
        """Build settings from environment variables.

        Invalid values are logged and replaced by their defaults.

        Returns:
            FiscalSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        currency = (
            os.getenv("FISCAL_CURRENCY", DEFAULT_CURRENCY).strip().upper()
            or DEFAULT_CURRENCY
        )
        return cls(
            currency=currency,
            cache_enabled=cls._read_bool(
                "FISCAL_CACHE_ENABLED", True, logger=logger
            ),
            cache_ttl_seconds=cls._read_int(
                "FISCAL_CACHE_TTL_SECONDS", 0, logger=logger
            ),
            max_records=cls._read_int(
                "FISCAL_MAX_RECORDS", DEFAULT_MAX_RECORDS, logger=logger
            ),
        )

    @staticmethod
    def _read_bool(name: str, default: bool, logger) -> bool:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        value = raw.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        logger.warning(f"Invalid boolean for {name}: {raw!r}; using {default}")
        return default

    @staticmethod
    def _read_int(name: str, default: int, logger) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"Invalid integer for {name}: {raw!r}; using {default}")
            return default
        if value < 0:
            logger.warning(f"Negative value for {name}: {value}; using {default}")
            return default
        return value


__all__ = ["FiscalSettings"]
