from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .types import ConfigError
from .utils import safe_int

LOCALES = ("ca", "de", "fr", "jp", "uk", "us")
DEFAULT_LOCALE = "us"

ENV_PREFIX = "CATALOG_"

_FLAGS = (
    "quiet",
    "verbose",
    "trust_title",
    "trust_track",
    "coveroverwrite",
    "ignore_asin",
    "ignore_upc",
    "ignore_ean",
    "amazon_info",
)


@dataclass
class Options:
    """Options of a catalog lookup.

    trust_title: titles are right, fix track/disc numbers from the catalog.
    trust_track: track numbers are right, fix titles from the catalog.
        Ignored when trust_title is set.
    coveroverwrite: replace an existing picture when a large cover is found.
    min_album_points: score an album needs to win the election.
    amazon_info: also copy the commerce fields (sales rank, prices, ...).
    """
    quiet: bool = False
    verbose: bool = False
    trust_title: bool = False
    trust_track: bool = False
    coveroverwrite: bool = False
    api_token: Optional[str] = None
    min_album_points: int = 10
    ignore_asin: bool = False
    ignore_upc: bool = False
    ignore_ean: bool = False
    max_pages: int = 10
    locale: str = DEFAULT_LOCALE
    amazon_info: bool = False

    def validate(self) -> "Options":
        if self.locale not in LOCALES:
            raise ConfigError(f"unsupported locale {self.locale!r}, expected one of {', '.join(LOCALES)}")
        if self.min_album_points < 0:
            raise ConfigError("min_album_points must be >= 0")
        if self.max_pages < 1:
            raise ConfigError("max_pages must be >= 1")
        return self

    @classmethod
    def from_env(cls, **overrides) -> "Options":
        """Build options from CATALOG_* environment variables (and .env).

        CATALOG_API_TOKEN is required; keyword overrides win over the
        environment.
        """
        load_dotenv(find_dotenv(usecwd=True), override=False)

        values = {}
        for name in _FLAGS:
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = _env_bool(raw)
        token = os.getenv(ENV_PREFIX + "API_TOKEN")
        if token:
            values["api_token"] = token
        locale = os.getenv(ENV_PREFIX + "LOCALE")
        if locale:
            values["locale"] = locale.strip().lower()
        for name in ("min_album_points", "max_pages"):
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is not None:
                n = safe_int(raw.strip())
                if n is None:
                    raise ConfigError(f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}")
                values[name] = n

        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"unknown options: {', '.join(sorted(unknown))}")
        values.update(overrides)

        opts = cls(**values)
        if not opts.api_token:
            raise ConfigError(f"{ENV_PREFIX}API_TOKEN must be set (environment or .env)")
        return opts.validate()


def _env_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}
