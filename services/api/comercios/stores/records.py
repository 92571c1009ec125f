"""JSON file store for the business record collection.

The whole collection lives in one file as a JSON array of record objects.
Every load re-reads and re-parses the full file; there is no in-memory copy
shared between requests and no partial result on failure.

Writes replace the file atomically (temp file + rename in the same
directory), so a concurrent reader sees either the previous collection or
the new one.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from comercios.schemas import BusinessRecord

logger = logging.getLogger("uvicorn.error")

_records_adapter = TypeAdapter(list[BusinessRecord])


class StoreError(RuntimeError):
    pass


class StoreUnavailable(StoreError):
    """The record file is missing or cannot be read."""


class StoreCorrupt(StoreError):
    """The record file does not decode into a list of business records."""


class RecordStore:
    """Reads and writes the record collection at `path`."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> list[BusinessRecord]:
        """Load the full record collection.

        Raises:
            StoreUnavailable: File missing or unreadable.
            StoreCorrupt: Content is not a JSON array of valid records.
        """
        logger.info(f"Reading record store: {self.path}")
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise StoreUnavailable(f"erro ao ler o arquivo {self.path}: {e}") from e

        try:
            records = _records_adapter.validate_json(raw)
        except ValidationError as e:
            raise StoreCorrupt(
                f"erro ao decodificar o JSON de {self.path}: {e.error_count()} erro(s), "
                f"primeiro: {_first_error(e)}"
            ) from e

        logger.info(f"Record store decoded: {len(records)} records")
        return records

    def save(self, records: list[BusinessRecord]) -> None:
        """Replace the whole collection with `records`."""
        payload = [r.model_dump(mode="json", by_alias=True) for r in records]
        directory = self.path.parent

        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
        except OSError as e:
            raise StoreUnavailable(f"erro ao salvar arquivo {self.path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=4)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StoreUnavailable(f"erro ao salvar arquivo {self.path}: {e}") from e

        logger.info(f"Record store written: {len(records)} records -> {self.path}")


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False)
    if not errors:
        return str(exc)
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"{loc or '<root>'}: {first.get('msg', '')}"
