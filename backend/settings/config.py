"""
Centralized configuration management using the Singleton pattern.

This module provides a single point of access to the billing settings used by
the seat and split-check engines. Values come from Django settings (which read
them from the environment) and are loaded lazily on first access.

The tax rate is never read from here by the calculators directly: callers build
a ``TaxPolicy`` and pass it in explicitly.
"""

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from django.conf import settings as django_settings
from django.core.exceptions import ImproperlyConfigured
import logging

from payments.money import DEFAULT_CURRENCY

logger = logging.getLogger(__name__)


DEFAULT_SEAT_STALE_MINUTES = 5
DEFAULT_SPLIT_WAYS = 2


@dataclass(frozen=True)
class TaxPolicy:
    """Tax rate (as a decimal fraction, 0.08 for 8%) and the currency it applies in."""
    rate: Decimal = Decimal("0")
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        if self.rate < 0:
            raise ValueError(f"Tax rate cannot be negative: {self.rate}")


class AppSettings:
    """
    A LAZY singleton class that provides centralized access to billing settings.
    It defers loading until the first setting is accessed so that importing this
    module never requires configured Django settings.
    """

    _instance: Optional["AppSettings"] = None
    _initialized: bool = False

    def __new__(cls) -> "AppSettings":
        """
        Implement the singleton pattern to ensure only one instance exists.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialization is deferred to the first attribute access.
        """
        pass

    def _setup(self):
        if not self._initialized:
            self.load_settings()
            self._initialized = True

    def __getattr__(self, name: str) -> Any:
        """
        Lazily loads settings on first access, then retrieves the attribute.
        """
        if not self._initialized:
            self._setup()

        # This check prevents infinite recursion for attributes that truly don't exist.
        try:
            return self.__dict__[name]
        except KeyError:
            raise AttributeError(f"'AppSettings' object has no attribute '{name}'")

    def load_settings(self) -> None:
        """
        Read POS_* values from Django settings and populate instance attributes.

        An unset tax rate means zero tax so a missing configuration is visible
        on every receipt instead of silently charging a guessed rate.
        """
        raw_rate = getattr(django_settings, "POS_TAX_RATE", None)
        if raw_rate in (None, ""):
            logger.warning("POS_TAX_RATE is not configured; seat and check tax will be 0")
            raw_rate = "0"

        try:
            tax_rate = Decimal(str(raw_rate))
        except InvalidOperation:
            raise ImproperlyConfigured(f"POS_TAX_RATE must be a decimal, got {raw_rate!r}")

        # === FINANCIAL SETTINGS ===
        self.tax_rate: Decimal = tax_rate
        self.currency: str = getattr(django_settings, "POS_CURRENCY", DEFAULT_CURRENCY) or DEFAULT_CURRENCY

        # === SEAT STATUS ===
        self.seat_stale_minutes: int = int(
            getattr(django_settings, "POS_SEAT_STALE_MINUTES", DEFAULT_SEAT_STALE_MINUTES)
        )

        # === SPLIT CHECK ===
        self.split_default_ways: int = int(
            getattr(django_settings, "POS_SPLIT_DEFAULT_WAYS", DEFAULT_SPLIT_WAYS)
        )
        if self.split_default_ways < 2:
            raise ImproperlyConfigured("POS_SPLIT_DEFAULT_WAYS must be at least 2")

        logger.debug(
            "Loaded billing settings: tax_rate=%s currency=%s stale_minutes=%s",
            self.tax_rate, self.currency, self.seat_stale_minutes,
        )

    def reload(self) -> None:
        """
        Reload settings (e.g. after override_settings in tests).
        """
        for key in ("tax_rate", "currency", "seat_stale_minutes", "split_default_ways"):
            self.__dict__.pop(key, None)
        self._initialized = False
        self._setup()
        logger.info("AppSettings reloaded")

    def get_tax_policy(self) -> TaxPolicy:
        return TaxPolicy(rate=self.tax_rate, currency=self.currency)

    def get_stale_window(self) -> timedelta:
        return timedelta(minutes=self.seat_stale_minutes)

    def __str__(self) -> str:
        return f"AppSettings(tax_rate={self.tax_rate}, currency={self.currency})"


app_settings = AppSettings()


def get_tax_policy() -> TaxPolicy:
    """TaxPolicy built from the configured settings."""
    return app_settings.get_tax_policy()
