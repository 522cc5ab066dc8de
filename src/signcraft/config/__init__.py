"""Configuration management for signcraft.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, project files or defaults.

Key classes:
- SignDimensions: Plate and letter dimensions in millimeters
- GeometryConfig: Tolerances and constants of the mesh pipeline
- ExportConfig: Output format and 3MF part/material settings
- LoggingConfig: Logging settings
- SignSettings: Main application settings
"""

from signcraft.config.settings import (
    BevelStyle,
    ExportConfig,
    GeometryConfig,
    LoggingConfig,
    OutputFormat,
    SignDimensions,
    SignSettings,
    TextAlign,
    get_default_settings,
)

__all__ = [
    "BevelStyle",
    "ExportConfig",
    "GeometryConfig",
    "LoggingConfig",
    "OutputFormat",
    "SignDimensions",
    "SignSettings",
    "TextAlign",
    "get_default_settings",
]
