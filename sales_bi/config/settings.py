"""
Sales BI Analytics
Centralized Configuration Management

This module provides configuration management using Pydantic settings with
environment variable support, validation, and type safety.
"""

from functools import lru_cache
from typing import Dict, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", description="Log format: json or text")
    log_file: Optional[str] = Field(default=None, description="Log file path")


class AnalyticsSettings(BaseSettings):
    """Analysis Engine Configuration"""

    model_config = SettingsConfigDict(env_prefix="ANALYTICS_")

    all_years_sentinel: str = Field(default="all", description="Year filter value selecting every year")
    profit_margin: float = Field(default=0.25, description="Estimated profit share of monthly revenue")
    moving_average_window: int = Field(default=3, description="Trailing window (months) for revenue smoothing")
    top_products_limit: int = Field(default=10, description="Number of best-selling products reported")
    bottom_products_limit: int = Field(default=5, description="Number of worst-selling products reported")
    performance_categories_limit: int = Field(default=6, description="Categories shown in the performance radar")

    @field_validator(
        "moving_average_window",
        "top_products_limit",
        "bottom_products_limit",
        "performance_categories_limit",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Window sizes and limits must be positive"""
        if v < 1:
            raise ValueError("Value must be a positive integer")
        return v

    @field_validator("profit_margin")
    @classmethod
    def validate_margin(cls, v: float) -> float:
        """Profit margin is a fraction of revenue"""
        if not 0.0 <= v <= 1.0:
            raise ValueError("Profit margin must be between 0 and 1")
        return v


class ColumnSettings(BaseSettings):
    """Source column labels produced by the import collaborator"""

    model_config = SettingsConfigDict(env_prefix="COLUMN_")

    product_code: str = Field(default="Kode Produk", description="Product code column")
    product_name: str = Field(default="Nama Produk", description="Product name column")
    category: str = Field(default="Kategori Produk", description="Product category column")
    quantity_sold: str = Field(default="Jumlah Unit Terjual", description="Units sold column")
    unit_price: str = Field(default="Harga Jual per Unit (Rp)", description="Unit price column")
    total_amount: str = Field(default="Total Nilai Transaksi (Rp)", description="Transaction value column")
    transaction_date: str = Field(default="Tanggal Transaksi", description="Transaction date column")

    @property
    def labels(self) -> Dict[str, str]:
        """Mapping of record field name to source column label"""
        return {
            "product_code": self.product_code,
            "product_name": self.product_name,
            "category": self.category,
            "quantity_sold": self.quantity_sold,
            "unit_price": self.unit_price,
            "total_amount": self.total_amount,
            "transaction_date": self.transaction_date,
        }


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")

    # Subsystem configurations
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    columns: ColumnSettings = Field(default_factory=ColumnSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
