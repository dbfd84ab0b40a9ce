"""
Configuration documents: load and save display sets.

A document is {"version": "1.0", "timestamp": ISO-8601, "displays": [...]},
stored as JSON (canonical) or YAML. Reading and writing go through a
FileStore so callers can swap the local filesystem for an in-memory store.
"""

from __future__ import annotations
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union
import json
import logging
import os
import yaml

from .geometry import Display, InvalidDisplayError

logger = logging.getLogger(__name__)

CONFIG_VERSION = "1.0"
FILE_STORE_ENV = "VIEWCAL_FILE_STORE"


class ConfigError(Exception):
    """Exception raised for configuration loading and validation errors."""
    pass


# ----------------------------
# File stores
# ----------------------------

class FileStore:
    """Minimal text storage interface used by load_config/save_config."""

    name = "abstract"

    def read_text(self, path: str) -> str:
        raise NotImplementedError

    def write_text(self, path: str, content: str) -> str:
        raise NotImplementedError

    def exists(self, path: str) -> bool:
        raise NotImplementedError


class LocalFileStore(FileStore):
    name = "local"

    def read_text(self, path: str) -> str:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def write_text(self, path: str, content: str) -> str:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(p, "w", encoding="utf-8") as f:
            f.write(content)
        return str(p)

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)


class MemoryFileStore(FileStore):
    """Keeps documents in a dict keyed by path; used for tests and embedding."""

    name = "memory"

    def __init__(self, files: Optional[Dict[str, str]] = None):
        self.files: Dict[str, str] = dict(files or {})

    def read_text(self, path: str) -> str:
        try:
            return self.files[str(path)]
        except KeyError:
            raise FileNotFoundError(path) from None

    def write_text(self, path: str, content: str) -> str:
        self.files[str(path)] = content
        return str(path)

    def exists(self, path: str) -> bool:
        return str(path) in self.files


_STORES = {
    LocalFileStore.name: LocalFileStore,
    MemoryFileStore.name: MemoryFileStore,
}
# one instance per kind, so documents saved to the memory store can be loaded back
_STORE_INSTANCES: Dict[str, FileStore] = {}


def get_file_store(kind: Optional[str] = None) -> FileStore:
    """
    Return the shared FileStore for a name ('local' or 'memory').
    Falls back to $VIEWCAL_FILE_STORE, then 'local'.
    """
    kind = (kind or os.environ.get(FILE_STORE_ENV) or LocalFileStore.name).strip().lower()
    if kind not in _STORES:
        raise ConfigError(f"Unknown file store {kind!r}; expected one of {sorted(_STORES)}")
    if kind not in _STORE_INSTANCES:
        _STORE_INSTANCES[kind] = _STORES[kind]()
    return _STORE_INSTANCES[kind]


# ----------------------------
# Documents
# ----------------------------

def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def create_new_config() -> Dict[str, Any]:
    """Empty configuration document."""
    return {"version": CONFIG_VERSION, "timestamp": _timestamp(), "displays": []}


def config_to_document(displays: Iterable[Display]) -> Dict[str, Any]:
    doc = create_new_config()
    doc["displays"] = [d.to_dict() for d in displays]
    return doc


def displays_from_document(doc: Any) -> List[Display]:
    """
    Validate a parsed document and build its displays.
    Raises ConfigError for a malformed document or any invalid display entry.
    """
    if not isinstance(doc, dict) or not isinstance(doc.get("displays"), list):
        raise ConfigError("Invalid configuration file format: top-level 'displays' list required")
    version = doc.get("version")
    if version is not None and str(version) != CONFIG_VERSION:
        logger.warning("Configuration version %s differs from %s; reading anyway", version, CONFIG_VERSION)
    out: List[Display] = []
    for i, entry in enumerate(doc["displays"]):
        try:
            out.append(Display.from_dict(entry))
        except InvalidDisplayError as e:
            raise ConfigError(f"Display #{i + 1}: {e}") from e
    return out


def _format_for(path: Union[str, Path]) -> str:
    suffix = Path(path).suffix.lower()
    if suffix in (".yaml", ".yml"):
        return "yaml"
    if suffix in (".json", ""):
        return "json"
    raise ConfigError(f"Unsupported configuration format: {suffix}")


def load_config(path: Union[str, Path], store: Optional[FileStore] = None) -> List[Display]:
    """Load displays from a JSON or YAML configuration document."""
    store = store or get_file_store()
    path = str(path)
    fmt = _format_for(path)
    if not store.exists(path):
        raise ConfigError(f"Configuration not found: {path}")
    try:
        content = store.read_text(path)
    except OSError as e:
        raise ConfigError(f"Error opening file: {e}") from e
    try:
        doc = yaml.safe_load(content) if fmt == "yaml" else json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Error parsing configuration: {e}") from e
    displays = displays_from_document(doc)
    logger.info("Loaded %d display(s) from %s", len(displays), path)
    return displays


def save_config(displays: Iterable[Display], path: Union[str, Path],
                store: Optional[FileStore] = None) -> str:
    """Write displays to path (format by suffix). Returns the path written."""
    store = store or get_file_store()
    path = str(path)
    fmt = _format_for(path)
    doc = config_to_document(displays)
    if fmt == "yaml":
        content = yaml.safe_dump(doc, sort_keys=False)
    else:
        content = json.dumps(doc, indent=2)
    try:
        written = store.write_text(path, content)
    except OSError as e:
        raise ConfigError(f"Error saving configuration: {e}") from e
    logger.info("Saved %d display(s) to %s", len(doc["displays"]), written)
    return written
