"""
Configuration package for the housing service.

Contains environment settings and logging configuration.
"""

from campus_housing.config.settings import Settings, get_settings, settings
from campus_housing.config.logging import setup_logging

__all__ = ['Settings', 'get_settings', 'settings', 'setup_logging']
