"""Locale negotiation and message lookup for API responses."""
from __future__ import annotations

from typing import List, Optional, Tuple
from fastapi import Request

from worktracker.localization.translations import TRANSLATIONS

DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES = tuple(TRANSLATIONS)


def _parse_accept_language(header: str) -> List[Tuple[str, float]]:
    """Split ``ru-RU,ru;q=0.9,en;q=0.8`` into (primary tag, weight) pairs."""
    ranges = []
    for part in header.split(","):
        tag, _, params = part.strip().partition(";")
        if not tag:
            continue
        weight = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                weight = float(params[2:])
            except ValueError:
                weight = 0.0
        ranges.append((tag.split("-")[0].strip().lower(), weight))
    return ranges


def get_locale_from_request(request: Optional[Request] = None, default: str = DEFAULT_LOCALE) -> str:
    """Pick the best supported locale from the Accept-Language header."""
    if request is None:
        return default

    header = request.headers.get("Accept-Language", "")
    candidates = [
        (weight, -position, tag)
        for position, (tag, weight) in enumerate(_parse_accept_language(header))
        if tag in SUPPORTED_LOCALES and weight > 0
    ]
    if not candidates:
        return default
    return max(candidates)[2]


def get_translation(key: str, locale: str = DEFAULT_LOCALE, **kwargs) -> str:
    """Message for ``key`` in ``locale``, falling back to English, then the key."""
    catalogue = TRANSLATIONS.get(locale.lower(), {})
    message = catalogue.get(key) or TRANSLATIONS[DEFAULT_LOCALE].get(key, key)
    if kwargs:
        try:
            message = message.format(**kwargs)
        except (KeyError, ValueError):
            pass
    return message
