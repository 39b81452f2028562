"""
Centralized configuration with environment variable overrides.

Business identity, the weekly schedule and cache behaviour are all
configurable here. Catalog prices live in ``detailing.catalog`` and are
not read from the environment.
"""

import logging
import os
import re
from dataclasses import dataclass, field

from dotenv import load_dotenv

from detailing.logging_context import LOG_FORMAT, install_request_id_filter

load_dotenv()

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")

MAX_CACHE_TTL_SEC = 900


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_str_list(env_var: str, default: str) -> tuple[str, ...]:
    """Parse a comma-separated list from an env var, dropping blanks."""
    raw = os.getenv(env_var, default)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _safe_int_list(env_var: str, default: str) -> tuple[int, ...]:
    """Parse a comma-separated list of integers from an env var."""
    parts = _safe_str_list(env_var, default)
    try:
        return tuple(int(part) for part in parts)
    except ValueError:
        raise ValueError(
            f"Invalid integer list for {env_var}: {os.getenv(env_var, default)!r}"
        ) from None


@dataclass(frozen=True)
class BusinessConfig:
    """Business identity settings loaded from environment or defaults."""

    name: str = os.getenv("BUSINESS_NAME", "Love 4 Detailing")
    timezone: str = os.getenv("BUSINESS_TIMEZONE", "Europe/London")
    currency: str = os.getenv("BUSINESS_CURRENCY", "GBP")


@dataclass(frozen=True)
class ScheduleConfig:
    """Weekly schedule: working days (0=Sunday) and the fixed daily slots."""

    working_days: tuple[int, ...] = _safe_int_list("WORKING_DAYS", "1,2,3,4,5,6")
    slot_times: tuple[str, ...] = _safe_str_list(
        "SLOT_TIMES", "10:00,11:30,13:00,14:30,16:00"
    )
    advance_booking_days: int = _safe_int("ADVANCE_BOOKING_DAYS", "30")
    min_notice_days: int = _safe_int("MIN_NOTICE_DAYS", "1")


@dataclass(frozen=True)
class CacheConfig:
    """Read-through cache settings for booked-slot lookups."""

    availability_ttl_sec: int = _safe_int("AVAILABILITY_CACHE_TTL_SEC", "120")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    schedule = config.schedule

    if not schedule.working_days:
        raise ValueError("WORKING_DAYS must list at least one day")
    for day in schedule.working_days:
        if not 0 <= day <= 6:
            raise ValueError(f"WORKING_DAYS entries must be between 0 and 6, got {day}")
    if len(set(schedule.working_days)) != len(schedule.working_days):
        raise ValueError(f"WORKING_DAYS contains duplicates: {schedule.working_days}")

    if not schedule.slot_times:
        raise ValueError("SLOT_TIMES must list at least one time")
    for slot_time in schedule.slot_times:
        if not _TIME_RE.match(slot_time):
            raise ValueError(f"SLOT_TIMES entries must be HH:MM (24-hour), got {slot_time!r}")
    if len(set(schedule.slot_times)) != len(schedule.slot_times):
        raise ValueError(f"SLOT_TIMES contains duplicates: {schedule.slot_times}")

    if schedule.advance_booking_days < 1:
        raise ValueError(
            f"ADVANCE_BOOKING_DAYS must be >= 1, got {schedule.advance_booking_days}"
        )
    if schedule.min_notice_days < 0:
        raise ValueError(f"MIN_NOTICE_DAYS must be >= 0, got {schedule.min_notice_days}")
    if schedule.min_notice_days > schedule.advance_booking_days:
        raise ValueError(
            "MIN_NOTICE_DAYS must not exceed ADVANCE_BOOKING_DAYS, "
            f"got {schedule.min_notice_days} > {schedule.advance_booking_days}"
        )

    ttl = config.cache.availability_ttl_sec
    if not 0 <= ttl <= MAX_CACHE_TTL_SEC:
        raise ValueError(
            f"AVAILABILITY_CACHE_TTL_SEC must be between 0 and {MAX_CACHE_TTL_SEC}, got {ttl}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    install_request_id_filter()
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
