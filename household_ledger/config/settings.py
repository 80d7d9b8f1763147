"""
Configuration Management for Household Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Party names, the settlement tolerance and the budget colour bands are the
only knobs the engine has; everything else is passed in per call.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Budget engine settings.

    Loads configuration from LEDGER_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # The two co-funding parties
    party_a_name: str = Field(
        default="Bruno",
        min_length=1,
        description="Display name of party A"
    )
    party_b_name: str = Field(
        default="Isadora",
        min_length=1,
        description="Display name of party B"
    )
    currency_symbol: str = Field(
        default="$",
        description="Symbol used when formatting amounts"
    )

    # Settlement
    settlement_tolerance: Decimal = Field(
        default=Decimal("1.00"),
        ge=0,
        description="Balance differences at or below this are treated as settled"
    )

    # Progress bar colour bands (percent of a category limit)
    warning_threshold_percent: float = Field(
        default=70.0,
        ge=0.0,
        description="Above this a category turns yellow"
    )
    critical_threshold_percent: float = Field(
        default=90.0,
        ge=0.0,
        description="Above this a category turns red"
    )

    # Entry validation thresholds
    max_transaction_amount: Decimal = Field(
        default=Decimal("100000"),
        gt=0,
        description="Amounts above this get a sanity warning"
    )
    future_date_tolerance_days: int = Field(
        default=7,
        ge=0,
        description="How many days in the future a transaction date can be"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum level for local structured logs"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False for console output)"
    )

    @model_validator(mode="after")
    def validate_thresholds(self) -> "LedgerSettings":
        if self.critical_threshold_percent < self.warning_threshold_percent:
            raise ValueError("Critical threshold cannot be below warning threshold")
        return self

    def party_name(self, party: str) -> str:
        """Display name for a Party/Buyer value ('party_a', 'party_b', 'joint')."""
        value = getattr(party, "value", party)
        if value == "party_a":
            return self.party_a_name
        if value == "party_b":
            return self.party_b_name
        return "Joint"

    def format_amount(self, amount: Decimal) -> str:
        return f"{self.currency_symbol}{amount:,.2f}"


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get ledger settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
