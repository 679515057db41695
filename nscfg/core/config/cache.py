from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Callable, Mapping, MutableMapping, Optional

from nscfg.core.config.tables import (
    DOCSRS_CACHE_KEY,
    DOCSRS_TAG,
    MANIFEST_DIR_KEY,
    MANIFEST_NAME,
)

logger = logging.getLogger(__name__)


class ConfigCache:
    """Set-once key/value cache shared by every expansion in a build.

    Backed by the process environment by default so that separate tool
    invocations launched from the same build see the memoized value.
    """

    def __init__(self, store: MutableMapping[str, str] | None = None) -> None:
        self._store = store if store is not None else os.environ
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def get_or_compute(self, key: str, compute: Callable[[], str]) -> str:
        with self._lock:
            cached = self._store.get(key)
            if cached is not None:
                return cached
            value = compute()
            self._store[key] = value
            logger.debug("cached %s=%s", key, value)
            return value

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is not None:
                self._store.pop(key, None)
                return
            for k in (DOCSRS_CACHE_KEY,):
                self._store.pop(k, None)


DEFAULT_CACHE = ConfigCache()


def probe_manifest(environ: Mapping[str, str] | None = None) -> bool:
    env = environ if environ is not None else os.environ
    manifest_dir = env.get(MANIFEST_DIR_KEY)
    if not manifest_dir:
        logger.debug("%s not set; docs.rs attributes disabled", MANIFEST_DIR_KEY)
        return False

    manifest = Path(manifest_dir) / MANIFEST_NAME
    try:
        content = manifest.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("manifest %s not readable; docs.rs attributes disabled", manifest)
        return False
    return DOCSRS_TAG in content


def docsrs_enabled(
    cache: ConfigCache | None = None, environ: Mapping[str, str] | None = None
) -> bool:
    """Return True when the manifest declares docs.rs metadata (memoized)."""
    c = cache if cache is not None else DEFAULT_CACHE
    value = c.get_or_compute(
        DOCSRS_CACHE_KEY, lambda: "true" if probe_manifest(environ) else "false"
    )
    return value == "true"
