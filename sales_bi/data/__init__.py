"""
Data Generation Module
"""
from .generators import CATALOGUE, SalesDataGenerator

__all__ = [
    "CATALOGUE",
    "SalesDataGenerator",
]
