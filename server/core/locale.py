# server/core/locale.py

from typing import Optional
from core import config


def split_locale(path: str) -> tuple[Optional[str], str]:
    """
    Splits a leading locale segment off a path.
    "/es/dashboard" -> ("es", "/dashboard"); "/dashboard" -> (None, "/dashboard")
    """
    segments = path.split("/", 2)
    if len(segments) > 1 and segments[1] in config.SUPPORTED_LOCALES:
        rest = "/" + segments[2] if len(segments) > 2 else "/"
        return segments[1], rest
    return None, path or "/"


def parse_accept_language(header: Optional[str]) -> list[str]:
    """
    Returns the language tags of an Accept-Language header, best first.
    """
    if not header:
        return []

    weighted = []
    for index, part in enumerate(header.split(",")):
        pieces = part.strip().split(";")
        tag = pieces[0].strip().lower()
        if not tag:
            continue
        quality = 1.0
        for param in pieces[1:]:
            key, _, value = param.strip().partition("=")
            if key == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            weighted.append((-quality, index, tag))

    return [tag for _, _, tag in sorted(weighted)]


def negotiate_locale(cookie_locale: Optional[str], accept_language: Optional[str]) -> str:
    if cookie_locale in config.SUPPORTED_LOCALES:
        return cookie_locale

    for tag in parse_accept_language(accept_language):
        if tag in config.SUPPORTED_LOCALES:
            return tag
        primary = tag.split("-")[0]
        if primary in config.SUPPORTED_LOCALES:
            return primary

    return config.DEFAULT_LOCALE


def localized_path(locale: str, path: str, query: str = "") -> str:
    target = f"/{locale}" if path in ("", "/") else f"/{locale}{path}"
    return f"{target}?{query}" if query else target
