"""Pricing service configuration from environment variables.

Environment variables:
    TAX_RATE: Default tax rate fraction (default: 0.08)
    FREE_SHIPPING_THRESHOLD: Subtotal for free standard shipping (default: 100)
    PORT: gRPC listen port (default: 50310)
    MAX_WORKERS: gRPC thread pool size (default: 10)
    LOG_LEVEL: Minimum log level (default: info)
"""

import logging
import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional

from .errors import ValidationError, errmsg
from .money import to_decimal
from .pricing import DEFAULT_FREE_SHIPPING_THRESHOLD, DEFAULT_TAX_RATE
from .validation import require_non_negative, require_tax_rate

DEFAULT_PORT = "50310"
DEFAULT_MAX_WORKERS = 10

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(frozen=True)
class PricingConfig:
    tax_rate: Decimal = DEFAULT_TAX_RATE
    free_shipping_threshold: Decimal = DEFAULT_FREE_SHIPPING_THRESHOLD
    port: str = DEFAULT_PORT
    max_workers: int = DEFAULT_MAX_WORKERS
    log_level: str = "info"

    @property
    def address(self) -> str:
        return f"[::]:{self.port}"

    @property
    def log_level_number(self) -> int:
        return LOG_LEVELS[self.log_level]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PricingConfig":
        """Build a config from ``environ`` (defaults to ``os.environ``).

        Raises:
            ValidationError: A variable is set to an unusable value.
        """
        env = os.environ if environ is None else environ

        tax_rate = to_decimal(env.get("TAX_RATE", str(DEFAULT_TAX_RATE)), "TAX_RATE")
        require_tax_rate(tax_rate)

        threshold = to_decimal(
            env.get("FREE_SHIPPING_THRESHOLD", str(DEFAULT_FREE_SHIPPING_THRESHOLD)),
            "FREE_SHIPPING_THRESHOLD",
        )
        require_non_negative(threshold, errmsg.THRESHOLD_NEGATIVE, "FREE_SHIPPING_THRESHOLD")

        port = env.get("PORT", DEFAULT_PORT)
        if not port.isdigit():
            raise ValidationError(f"{errmsg.INVALID_SETTING}: PORT={port}", "PORT")

        max_workers = env.get("MAX_WORKERS", str(DEFAULT_MAX_WORKERS))
        if not max_workers.isdigit() or int(max_workers) < 1:
            raise ValidationError(f"{errmsg.INVALID_SETTING}: MAX_WORKERS={max_workers}", "MAX_WORKERS")

        log_level = env.get("LOG_LEVEL", "info").lower()
        if log_level not in LOG_LEVELS:
            raise ValidationError(f"{errmsg.INVALID_SETTING}: LOG_LEVEL={log_level}", "LOG_LEVEL")

        return cls(
            tax_rate=tax_rate,
            free_shipping_threshold=threshold,
            port=port,
            max_workers=int(max_workers),
            log_level=log_level,
        )
