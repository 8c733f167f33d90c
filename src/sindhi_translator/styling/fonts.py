"""
Script families and font asset resolution.

Maps language codes to writing systems, decides reading direction, and
checks whether a font able to render a script is present on disk.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class ScriptType(str, Enum):
    """Script types for language support."""

    LATIN = "latin"
    ARABIC = "arabic"
    HEBREW = "hebrew"
    CJK = "cjk"  # Chinese, Japanese, Korean
    CYRILLIC = "cyrillic"
    GREEK = "greek"
    THAI = "thai"
    DEVANAGARI = "devanagari"


# Language to script mapping
LANGUAGE_SCRIPTS: dict[str, ScriptType] = {
    "en": ScriptType.LATIN,
    "fr": ScriptType.LATIN,
    "de": ScriptType.LATIN,
    "es": ScriptType.LATIN,
    "it": ScriptType.LATIN,
    "pt": ScriptType.LATIN,
    "ar": ScriptType.ARABIC,
    "fa": ScriptType.ARABIC,  # Persian/Farsi
    "ur": ScriptType.ARABIC,  # Urdu
    "sd": ScriptType.ARABIC,  # Sindhi (Perso-Arabic orthography)
    "ps": ScriptType.ARABIC,  # Pashto
    "pa-arab": ScriptType.ARABIC,  # Shahmukhi Punjabi
    "he": ScriptType.HEBREW,
    "zh": ScriptType.CJK,
    "ja": ScriptType.CJK,
    "ko": ScriptType.CJK,
    "ru": ScriptType.CYRILLIC,
    "el": ScriptType.GREEK,
    "th": ScriptType.THAI,
    "hi": ScriptType.DEVANAGARI,
}

# RTL scripts
RTL_SCRIPTS = {ScriptType.ARABIC, ScriptType.HEBREW}

# Font files known to cover each script, looked up inside the fonts directory
DEFAULT_FONT_FILES: dict[str, str] = {
    ScriptType.ARABIC.value: "Amiri-Regular.ttf",
}


def get_script_for_language(language: str) -> ScriptType:
    """Get the script type for a language code."""
    return LANGUAGE_SCRIPTS.get(language.lower(), ScriptType.LATIN)


def is_rtl_language(language: str) -> bool:
    """Check if a language uses RTL script."""
    script = get_script_for_language(language)
    return script in RTL_SCRIPTS


@dataclass(frozen=True)
class FontCapability:
    """Whether a script-appropriate font asset can be used for a render."""

    # Plain string for a family name outside ScriptType
    script: ScriptType | str
    available: bool
    asset_path: Path | None

    @property
    def script_name(self) -> str:
        return self.script.value if isinstance(self.script, ScriptType) else self.script

    @property
    def family(self) -> str:
        """CSS family name the asset is registered under."""
        return f"{self.script_name}-text"


class FontResolver:
    """
    Resolves font assets for script families.

    Every call re-checks the filesystem, so a font dropped into the fonts
    directory is picked up by the next render without a restart. Resolution
    never raises: a missing or unreadable asset yields ``available=False``.
    """

    def __init__(
        self,
        fonts_dir: Path | str,
        files: Mapping[str, str] | None = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            fonts_dir: Directory holding font files.
            files: Script family value -> font filename. Defaults to DEFAULT_FONT_FILES.
        """
        self.fonts_dir = Path(fonts_dir)
        self.files = dict(DEFAULT_FONT_FILES if files is None else files)

    def asset_path(self, script: ScriptType | str) -> Path | None:
        """Well-known path for the script's font, whether or not it exists."""
        key = script.value if isinstance(script, ScriptType) else str(script)
        filename = self.files.get(key)
        if not filename:
            return None
        return self.fonts_dir / filename

    def resolve(self, script: ScriptType | str) -> FontCapability:
        """
        Check whether the font asset for a script family is usable.

        Args:
            script: Script family (enum member or its value). Unknown family
                names are looked up in the file mapping as plain strings.

        Returns:
            FontCapability with the asset path when available.
        """
        try:
            script = ScriptType(script)
        except ValueError:
            logger.debug("No script family named %r", script)
        path = self.asset_path(script)
        if path is None:
            return FontCapability(script=script, available=False, asset_path=None)

        try:
            available = path.is_file()
        except OSError as e:
            logger.warning("Cannot stat font %s: %s", path, e)
            available = False

        if not available:
            capability = FontCapability(script=script, available=False, asset_path=None)
            logger.debug("Font for %s script missing at %s", capability.script_name, path)
            return capability

        return FontCapability(script=script, available=True, asset_path=path)

    def resolve_language(self, language: str) -> FontCapability:
        """Resolve the font for the script a language is written in."""
        return self.resolve(get_script_for_language(language))
