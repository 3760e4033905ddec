"""
Configuration type definitions and exceptions for bn-data-editor.
"""

from dataclasses import dataclass
from typing import List


class ConfigError(Exception):
    """Raised when configuration is invalid or cannot be accessed."""
    pass


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str]
    warnings: List[str]


@dataclass
class GamePathInfo:
    """What a candidate game directory turned out to be."""
    valid: bool
    path_type: str
    data_path: str
    is_bn_root: bool
