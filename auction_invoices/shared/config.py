"""Shared configuration management for the invoice ingest core.

Based on Pydantic Settings v2 best practices:
https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Running page header/footer phrases the vendor's PDF generator repeats on
# every page. They are removed verbatim before segmentation.
DEFAULT_BOILERPLATE_PHRASES: list[str] = [
    "Monday: CloseTuesday - Saturday: 12:00pm - 6:30pm",
    "CC Power Deals240 Bartor Road, Unit 4, North York, ON, M9M 2W6+1 416-740-2333",
    "READ NEW TERMS OF USE BEFORE YOU BID!",
    "READ EMAIL FOR PICK-UP & SHIPPING INSTRUCTIONS",
    "Sunday: CloseWe Asked All Items Should Check at Our Location",
    "NO RETURN AND REFUND",
    "#:Date:Page:UNPAIDLot#DESCRIPTIONUNIT PRICEEXTENDEDPRICE",
    (
        "Monday & Sunday: CloseTuesday - Saturday: 12:00pm - 6:30pm"
        "We Asked All Items Should Check at Our Location"
    ),
]


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with the prefix 'APP_'.
    Example: APP_LOG_LEVEL=debug
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Parsing configuration
    invoice_timezone: str = Field(
        default="America/New_York",
        description="IANA zone that parsed invoice timestamps are localized to",
    )
    boilerplate_phrases: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BOILERPLATE_PHRASES),
        description="Running header/footer phrases stripped before segmentation",
    )

    # Inventory lookup configuration
    inventory_backend: Literal["memory", "http"] = Field(
        default="memory",
        description="Sold-item lookup backend: memory (seeded records), http (inventory service)",
    )
    inventory_base_url: str = Field(
        default="http://localhost:8080",
        description="Inventory service base URL (for inventory_backend='http')",
    )
    inventory_timeout_seconds: float = Field(
        default=10.0,
        description="Per-request timeout for inventory lookups",
        gt=0,
    )
    inventory_seed_path: Path | None = Field(
        default=None,
        description="JSON file of remaining-inventory records (for inventory_backend='memory')",
    )

    # Batch processing configuration
    batch_max_workers: int = Field(
        default=4,
        description="Maximum number of documents parsed concurrently in one batch",
        ge=1,
    )
    batch_timeout_seconds: float = Field(
        default=60.0,
        description="Deadline for enrichment lookups across one batch",
        gt=0,
    )


def get_settings() -> Settings:
    """Factory function to get settings instance.

    Returns:
        Configured Settings instance
    """
    return Settings()
