"""
Document stores — load and persist the whole JSON document.

``DocumentStore`` is the interface handlers depend on; ``JsonFileStore`` is
the production backend, ``InMemoryStore`` backs tests.

Neither backend locks around read-modify-write: two requests that load the
same document and save it back race, and the last ``save`` wins.
"""

from __future__ import annotations

import json
import logging
import pathlib
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import ValidationError as SchemaError

from utils.errors import StorageError
from utils.schemas import Document

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT: Dict[str, Any] = {"users": [], "posts": {}}


def _encode(document: Document) -> str:
    return json.dumps(document.to_json(), indent=2, ensure_ascii=False)


def _decode(text: str, source: str) -> Document:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StorageError(f"{source} is not valid JSON: {exc}") from exc
    try:
        return Document.model_validate(raw)
    except SchemaError as exc:
        raise StorageError(f"{source} does not match the document shape") from exc


class DocumentStore(ABC):
    """Abstract whole-document persistence."""

    @abstractmethod
    def load(self) -> Document:
        """
        Return the full document.

        Raises
        ------
        StorageError – document missing, unreadable or malformed
        """
        ...

    @abstractmethod
    def save(self, document: Document) -> None:
        """Overwrite the stored document in full."""
        ...

    @abstractmethod
    def exists(self) -> bool:
        ...

    def initialize(self) -> bool:
        """
        Write an empty document if nothing is stored yet.

        Returns True when a document was created.
        """
        if self.exists():
            return False
        self.save(Document.model_validate(EMPTY_DOCUMENT))
        return True


class JsonFileStore(DocumentStore):
    """Document persisted as a single UTF-8 JSON file."""

    def __init__(self, path: str | pathlib.Path):
        self.path = pathlib.Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Document:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise StorageError(f"Datastore file {self.path} does not exist") from exc
        except OSError as exc:
            logger.error("Failed to read %s: %s", self.path, exc)
            raise StorageError(f"Datastore file {self.path} is unreadable") from exc
        return _decode(text, str(self.path))

    def save(self, document: Document) -> None:
        try:
            self.path.write_text(_encode(document), encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write %s: %s", self.path, exc)
            raise StorageError(f"Datastore file {self.path} is not writable") from exc

    def initialize(self) -> bool:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        created = super().initialize()
        if created:
            logger.info("%s created", self.path)
        return created


class InMemoryStore(DocumentStore):
    """
    Keeps the serialized document in memory.

    Storing text rather than the model means every ``load`` hands out an
    independent copy, the same as re-reading a file.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._text: Optional[str] = None
        if initial is not None:
            self._text = json.dumps(initial, indent=2)

    def exists(self) -> bool:
        return self._text is not None

    def load(self) -> Document:
        if self._text is None:
            raise StorageError("In-memory document has not been initialized")
        return _decode(self._text, "in-memory document")

    def save(self, document: Document) -> None:
        self._text = _encode(document)

    def dump(self) -> Optional[str]:
        """Raw stored text, for assertions."""
        return self._text
