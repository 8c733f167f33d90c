"""
Script and font handling for exported documents.

Decides reading direction per language and locates font assets that can
render right-to-left scripts.
"""

from sindhi_translator.styling.fonts import (
    FontCapability,
    FontResolver,
    ScriptType,
    get_script_for_language,
    is_rtl_language,
)

__all__ = [
    "FontCapability",
    "FontResolver",
    "ScriptType",
    "get_script_for_language",
    "is_rtl_language",
]
