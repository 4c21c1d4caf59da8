"""
Sales BI Analytics
Configuration Module
"""
from .settings import AnalyticsSettings, ColumnSettings, Settings, get_settings

__all__ = ["AnalyticsSettings", "ColumnSettings", "Settings", "get_settings"]
