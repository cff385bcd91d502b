"""Localized string lookup backed by per-plugin language files."""
import json
import logging
import os
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)


class StringService:
    """
    Resolves ``(key, component)`` pairs to localized text.

    Strings live in ``<plugin_dir>/lang/<language>.json`` as a flat
    key -> text mapping. Missing strings render as ``[[key]]`` so gaps
    are visible on the page rather than raising.
    """

    def __init__(self, search_dirs: List[str], language: str = "en"):
        self._search_dirs = search_dirs
        self._language = language
        self._cache: Dict[Tuple[str, str], Dict[str, str]] = {}

    def _load(self, component: str, language: str) -> Dict[str, str]:
        cache_key = (component, language)
        if cache_key in self._cache:
            return self._cache[cache_key]

        strings: Dict[str, str] = {}
        for search_dir in self._search_dirs:
            lang_path = os.path.join(search_dir, component, "lang", f"{language}.json")
            if not os.path.exists(lang_path):
                continue
            try:
                with open(lang_path, "r", encoding="utf-8") as f:
                    strings = json.load(f)
                break
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Failed to read strings for '{component}': {e}")

        self._cache[cache_key] = strings
        return strings

    def get_string(self, key: str, component: str) -> str:
        """Get a localized string, falling back to English, then ``[[key]]``."""
        strings = self._load(component, self._language)
        if key in strings:
            return strings[key]

        if self._language != "en":
            fallback = self._load(component, "en")
            if key in fallback:
                return fallback[key]

        logger.warning(f"Missing string '{key}' in component '{component}'")
        return f"[[{key}]]"
