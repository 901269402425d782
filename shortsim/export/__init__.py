"""Export of script variants for sharing outside the app."""

from .markdown import export_variants, variant_to_markdown

__all__ = ["export_variants", "variant_to_markdown"]
