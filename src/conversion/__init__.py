"""End-to-end conversion chain: extract, structure, reflow, publish."""

from src.conversion.service import ConversionResult, ConversionService, resolve_title

__all__ = ["ConversionResult", "ConversionService", "resolve_title"]
