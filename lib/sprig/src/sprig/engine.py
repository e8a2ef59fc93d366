"""Engine - compiles templates with a shared config and caches the results.

Compiled templates are immutable, so one cached Template can be handed to any
number of callers. The cache is keyed by a hash of the source text.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from collections import OrderedDict
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from sprig.config import EngineConfig
from sprig.exceptions import TemplateNotFoundError
from sprig.template import Template, compile

log = logging.getLogger(__name__)


def _hash_source(source: str) -> str:
    """Compute SHA256 hash of template source."""
    return hashlib.sha256(source.encode("utf-8")).hexdigest()[:16]


class Engine:
    """Compiles and caches templates under one EngineConfig."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self._cache: OrderedDict[str, Template] = OrderedDict()
        self._lock = threading.Lock()

    def compile(self, source: str) -> Template:
        """Compile `source`, reusing a cached Template when possible."""
        if self.config.cache_size == 0:
            return compile(source, self.config)

        key = _hash_source(source)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                log.debug("Template cache hit %s", key)
                return cached

        log.debug("Template cache miss %s", key)
        template = compile(source, self.config)

        with self._lock:
            self._cache[key] = template
            self._cache.move_to_end(key)
            while len(self._cache) > self.config.cache_size:
                evicted, _ = self._cache.popitem(last=False)
                log.debug("Evicted template %s", evicted)

        return template

    def compile_file(self, path: Path | str) -> Template:
        """Read and compile a template file.

        Raises:
            TemplateNotFoundError: If the file does not exist.
        """
        path = Path(path)
        if not path.is_file():
            raise TemplateNotFoundError(path)
        return self.compile(path.read_text(encoding=self.config.encoding))

    def render(self, source: str, data: Optional[Mapping[str, Any]] = None) -> str:
        """Compile (or fetch) `source` and render it against `data`."""
        return self.compile(source).render(data)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
