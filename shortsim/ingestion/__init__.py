"""Ingestion of producer script JSON, with boundary validation."""

from .parser import ScriptParseError, load_variants, parse_variants, save_variants
from .validator import ScriptValidationError, has_errors, validate_variant

__all__ = [
    "ScriptParseError",
    "ScriptValidationError",
    "has_errors",
    "load_variants",
    "parse_variants",
    "save_variants",
    "validate_variant",
]
