"""
Settings Store

Named options persisted by the host. The auditor keeps exactly one option:
the list of post types selected in the report filter.
Options are stored in a JSON file (data/site_options.json by default).
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from meta_auditor.schemas.audit import AuditQuery

logger = logging.getLogger(__name__)

POST_TYPES_OPTION = "seo_meta_auditor_post_types"


class SettingsStore(ABC):
    """Read/write access to named options."""

    @abstractmethod
    def get_option(self, name: str, default: Any = None) -> Any:
        """Return the stored value for ``name`` or ``default``."""

    @abstractmethod
    def update_option(self, name: str, value: Any) -> None:
        """Store ``value`` under ``name``, replacing any previous value."""


class JsonFileSettingsStore(SettingsStore):
    """Options kept together in a single JSON document on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        """Load options from file, returning an empty dict if unavailable."""
        if self.path.exists():
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    return data
                logger.warning(f"Ignoring options file {self.path}: not a JSON object")
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Failed to read options file: {e}")
        return {}

    def _save(self, options: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(options, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    def get_option(self, name: str, default: Any = None) -> Any:
        return self._load().get(name, default)

    def update_option(self, name: str, value: Any) -> None:
        options = self._load()
        options[name] = value
        self._save(options)


class PostTypePreference:
    """The persisted post type selection of the report filter."""

    def __init__(self, store: SettingsStore, default: list[str] | None = None):
        self.store = store
        self.default = list(default) if default is not None else ["page"]

    def load(self) -> list[str]:
        stored = self.store.get_option(POST_TYPES_OPTION, self.default)
        if not isinstance(stored, list):
            return list(self.default)
        return [str(t) for t in stored]

    def save(self, post_types: list[str]) -> None:
        self.store.update_option(POST_TYPES_OPTION, list(post_types))
        logger.info(f"Post type selection saved: {', '.join(post_types) or '(none)'}")

    def resolve(self, query: AuditQuery) -> list[str]:
        """
        Selection to report on for this request.

        A selection carried by the request replaces the stored one; otherwise
        the stored selection (or the default) is used.
        """
        if query.post_types_supplied:
            self.save(query.post_types)
            return list(query.post_types)
        return self.load()
