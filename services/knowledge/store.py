"""
Regulation Store
================

Read-only access to the regulation documents and the AI configuration.

The engine only needs three reads: enumerate identifiers, read one
regulation document, read the configuration document. Stores return raw
decoded documents; validation happens in the cache manager.

Version: 0.1.0
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from shared.config import settings
from shared.exceptions import (
    ConfigUnavailable,
    RegulationMalformed,
    RegulationNotFound,
    StoreUnavailable,
)
from shared.logging import get_logger


logger = get_logger(__name__)


@runtime_checkable
class RegulationStore(Protocol):
    """Read contract every regulation store honors."""

    def list_ids(self) -> list[str]:
        """All known regulation identifiers, in a stable order."""
        ...

    def read_regulation(self, regulation_id: str) -> dict[str, Any]:
        """Raw document for one regulation; raises RegulationNotFound."""
        ...

    def read_config(self) -> dict[str, Any]:
        """Raw AI configuration document; raises ConfigUnavailable."""
        ...


class FileRegulationStore:
    """
    JSON documents on disk.

    Layout:
        <base_path>/ai-config.json
        <base_path>/regulations/<id>.json
    """

    def __init__(
        self,
        base_path: Path | str | None = None,
        regulations_dir: str | None = None,
        config_filename: str | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            base_path: Knowledge base directory (default from settings)
            regulations_dir: Sub-directory of regulation documents
            config_filename: File name of the AI configuration
        """
        self.base_path = Path(base_path) if base_path else settings.knowledge.base_path
        self.regulations_path = self.base_path / (regulations_dir or settings.knowledge.regulations_dir)
        self.config_path = self.base_path / (config_filename or settings.knowledge.config_filename)

    def list_ids(self) -> list[str]:
        if not self.regulations_path.is_dir():
            logger.error("regulation_store_missing", path=str(self.regulations_path))
            raise StoreUnavailable(f"regulations directory not found: {self.regulations_path}")

        try:
            return sorted(p.stem for p in self.regulations_path.glob("*.json") if p.is_file())
        except OSError as e:
            logger.error("regulation_store_list_failed", path=str(self.regulations_path), error=str(e))
            raise StoreUnavailable(str(e)) from e

    def read_regulation(self, regulation_id: str) -> dict[str, Any]:
        # Identifiers map to file names; anything path-like is unknown
        if not regulation_id or Path(regulation_id).name != regulation_id:
            raise RegulationNotFound(regulation_id)

        path = self.regulations_path / f"{regulation_id}.json"
        if not path.is_file():
            raise RegulationNotFound(regulation_id)

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("regulation_read_failed", regulation_id=regulation_id, error=str(e))
            raise StoreUnavailable(str(e)) from e

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise RegulationMalformed(regulation_id, reason=f"invalid JSON: {e.msg}") from e

    def read_config(self) -> dict[str, Any]:
        try:
            raw = self.config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigUnavailable(f"cannot read {self.config_path.name}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigUnavailable(f"invalid JSON: {e.msg}") from e

        if not isinstance(data, dict):
            raise ConfigUnavailable("configuration is not an object")
        return data


class InMemoryRegulationStore:
    """Store backed by dictionaries; used for embedding and tests."""

    def __init__(
        self,
        regulations: Mapping[str, Any] | None = None,
        config: dict[str, Any] | None = None,
    ) -> None:
        self.regulations: dict[str, Any] = dict(regulations or {})
        self.config = config

    def list_ids(self) -> list[str]:
        return sorted(self.regulations)

    def read_regulation(self, regulation_id: str) -> dict[str, Any]:
        if regulation_id not in self.regulations:
            raise RegulationNotFound(regulation_id)
        return json.loads(json.dumps(self.regulations[regulation_id]))

    def read_config(self) -> dict[str, Any]:
        if self.config is None:
            raise ConfigUnavailable("no configuration loaded")
        return json.loads(json.dumps(self.config))
