"""
Centralized settings for the program estimator.

Defaults can be overridden with ESTIMATOR_* environment variables.
"""
import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional

from ..engine.models import EstimateInput

logger = logging.getLogger(__name__)

ENV_PREFIX = "ESTIMATOR_"


def _env(name: str, cast: Callable, default):
    """Read ESTIMATOR_<name>, cast it, or fall back to the default."""
    key = ENV_PREFIX + name
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise ValueError(f"Invalid value for {key}: {raw!r}") from e


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Pricing defaults (JPY)
    base_weekly_price: float = 25000.0
    insurance_per_student: float = 8000.0

    # Form defaults
    program_name: str = "(Example) Custom program estimate"

    # Display precision
    factor_digits: int = 2
    product_digits: int = 3

    # How long the copy/download notice stays up
    copy_message_seconds: float = 1.5

    @classmethod
    def load(cls) -> 'Settings':
        """Load settings from the environment."""
        defaults = cls()
        settings = cls(
            base_weekly_price=_env("BASE_WEEKLY_PRICE", float, defaults.base_weekly_price),
            insurance_per_student=_env("INSURANCE_PER_STUDENT", float, defaults.insurance_per_student),
            program_name=_env("PROGRAM_NAME", str, defaults.program_name),
            factor_digits=_env("FACTOR_DIGITS", int, defaults.factor_digits),
            product_digits=_env("PRODUCT_DIGITS", int, defaults.product_digits),
            copy_message_seconds=_env("COPY_MESSAGE_SECONDS", float, defaults.copy_message_seconds),
        )
        if settings.base_weekly_price <= 0:
            raise ValueError(f"{ENV_PREFIX}BASE_WEEKLY_PRICE must be positive")
        if settings.insurance_per_student < 0:
            raise ValueError(f"{ENV_PREFIX}INSURANCE_PER_STUDENT must not be negative")
        logger.debug("Loaded settings: %s", settings)
        return settings


def default_input(settings: Optional[Settings] = None) -> EstimateInput:
    """The form's initial (and reset) state."""
    settings = settings or get_settings()
    return EstimateInput(
        weeks=2,
        participants=15,
        has_japanese_lesson=True,
        cultural_times=5,
        prep_complexity="New",
        lecture="None",
        company_visit_times=1,
        base_weekly_price=settings.base_weekly_price,
        insurance_per_student=settings.insurance_per_student,
        use_manual_mgmt_fee=False,
        management_fee_per_student_manual=None,
    )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
