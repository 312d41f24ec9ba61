# messenger_shell/core/context_menu.py

"""
Labels and entries for the "open externally" part of the right-click menu.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

DEFAULT_LANGUAGE = "en"

LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "open_link": "Open link in browser",
        "open_image": "Open image in browser",
        "open_video": "Open video in browser",
    },
    "de": {
        "open_link": "Link im Browser öffnen",
        "open_image": "Bild im Browser öffnen",
        "open_video": "Video im Browser öffnen",
    },
}


@dataclass(frozen=True)
class ExternalEntry:
    label: str
    url: str


def language_code(locale_name: Optional[str]) -> str:
    """'de_DE' / 'de-AT' / 'DE' -> 'de'; unknown or empty -> baseline language."""
    if not locale_name:
        return DEFAULT_LANGUAGE
    code = locale_name.replace("-", "_").split("_", 1)[0].lower()
    return code if code in LABELS else DEFAULT_LANGUAGE


def labels_for(locale_name: Optional[str]) -> Dict[str, str]:
    return LABELS[language_code(locale_name)]


def external_entries(
    locale_name: Optional[str],
    link_url: str = "",
    image_url: str = "",
    video_url: str = "",
) -> List[ExternalEntry]:
    """Entries to prepend, in link/image/video order, for the URLs that are set."""
    labels = labels_for(locale_name)
    entries = []
    if link_url:
        entries.append(ExternalEntry(labels["open_link"], link_url))
    if image_url:
        entries.append(ExternalEntry(labels["open_image"], image_url))
    if video_url:
        entries.append(ExternalEntry(labels["open_video"], video_url))
    return entries
