# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
File-based storage for the editable site content documents.

Each named document (profile, statistics, sub-bagian) is a single JSON file
in settings.content_dir. The frontend reads them through the admin API and
admins update them with partial documents.

Assumptions:
- Documents are JSON objects with a "metadata" object
- Unknown names are rejected, the name never becomes part of a path
- Missing files read as the default structure
- Writes merge into the existing document and back it up first
- No locking; last writer wins
"""
import copy
import json
import shutil
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from lppm.config import settings
from lppm.logging_utils import log_audit_event

DEFAULT_DATA_SOURCE = "LPPM Unila Database"
FALLBACK_DESCRIPTION = "Data LPPM Universitas Lampung"
PLACEHOLDER_PORTRAIT = "https://via.placeholder.com/400x400"
PLACEHOLDER_CHART = "https://via.placeholder.com/1200x800"

CONTENT_FILES = {
    "profile": "profile-lppm.json",
    "statistics": "statistics.json",
    "sub-bagian": "sub-bagian-lppm.json",
}

DESCRIPTIONS = {
    "profile": "Profil lengkap LPPM Universitas Lampung",
    "statistics": (
        "Statistik penelitian, pengabdian, dan HKI/Paten LPPM "
        "Universitas Lampung periode 2020-2025"
    ),
    "sub-bagian": "Data lengkap sub bagian dan unit di LPPM Universitas Lampung",
}


class ContentStoreError(Exception):
    """Raised when a content document cannot be read or written."""
    pass


class ContentNotFoundError(ContentStoreError):
    """Raised for a document name that is not in CONTENT_FILES."""
    pass


class ContentFormatError(ContentStoreError):
    """Raised when a stored document is not a valid JSON object."""
    pass


def _today() -> str:
    return date.today().isoformat()


def get_content_path(name: str) -> Optional[Path]:
    """Map a document name to its file.

    Args:
        name: Document name (profile, statistics, sub-bagian)

    Returns:
        Path: File location, or None for unknown names
    """
    filename = CONTENT_FILES.get(name)
    if filename is None:
        return None
    return Path(settings.content_dir) / filename


def default_description(name: str) -> str:
    """Return the metadata description used when a document has none."""
    return DESCRIPTIONS.get(name, FALLBACK_DESCRIPTION)


def _default_metadata(name: str) -> dict:
    return {
        "last_updated": _today(),
        "data_source": DEFAULT_DATA_SOURCE,
        "description": default_description(name),
    }


def _leader(jabatan: str) -> dict:
    return {
        "nama": "",
        "foto": "",
        "placeholder": PLACEHOLDER_PORTRAIT,
        "jabatan": jabatan,
        "periode": "",
    }


def default_content(name: str) -> dict:
    """Build the empty structure of a document.

    Args:
        name: Document name

    Returns:
        dict: Fresh default document ({} for unknown names)
    """
    if name == "profile":
        return {
            "metadata": _default_metadata(name),
            "pimpinan": {
                "kepala_lppm": _leader("Kepala LPPM"),
                "sekretaris_lppm": _leader("Sekretaris LPPM"),
            },
            "visi_misi": {
                "visi": "",
                "misi": [],
            },
            "tugas_fungsi": {
                "tugas": [],
                "fungsi": [],
            },
            "struktur_organisasi": {
                "gambar_struktur": "",
                "gambar_placeholder": PLACEHOLDER_CHART,
                "deskripsi": "",
            },
        }
    if name == "statistics":
        return {
            "metadata": _default_metadata(name),
            "yearly_data": [],
            "total_summary": {
                "total_penelitian_blu": 0,
                "total_pengabdian_blu": 0,
                "total_paten": 0,
                "total_haki": 0,
                "growth_penelitian": 0,
                "growth_pengabdian": 0,
                "growth_paten": 0,
                "growth_haki": 0,
            },
            "quarterly_data": [],
        }
    if name == "sub-bagian":
        return {
            "metadata": _default_metadata(name),
            "sub_bagian": {
                "pui": [],
                "puslit": [],
                "administrasi": [],
            },
        }
    return {}


def merge_content(existing: dict, incoming: dict) -> dict:
    """Recursively merge an update into an existing document.

    Args:
        existing: Current document
        incoming: Partial update

    Returns:
        dict: New merged document; neither argument is modified

    Assumptions:
    - Objects merge key by key
    - Lists are concatenated (existing items first)
    - Any other conflict is won by the incoming value
    """
    merged = copy.deepcopy(existing)
    for key, value in incoming.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_content(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = current + copy.deepcopy(value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _load(path: Path) -> Any:
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ContentFormatError(f"{path.name} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ContentStoreError(str(e)) from e
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ContentFormatError(f"Invalid JSON in {path.name}: {e}") from e


def read_content(name: str) -> dict:
    """Read a document, filling in defaults for missing parts.

    Args:
        name: Document name

    Returns:
        dict: The document

    Raises:
        ContentNotFoundError: Unknown document name
        ContentFormatError: Stored file is not a JSON object
        ContentStoreError: File could not be read
    """
    path = get_content_path(name)
    if path is None:
        raise ContentNotFoundError(f"Unknown content document: {name}")

    if not path.exists():
        return default_content(name)

    data = _load(path)
    if not isinstance(data, dict):
        raise ContentFormatError(f"{path.name} does not contain a JSON object")

    if not isinstance(data.get("metadata"), dict):
        defaults = default_content(name)
        stored_metadata = data.get("metadata")
        data = {**defaults, **data}
        data["metadata"] = {
            **defaults.get("metadata", {}),
            **(stored_metadata if isinstance(stored_metadata, dict) else {}),
        }

    if not data["metadata"].get("last_updated"):
        data["metadata"]["last_updated"] = _today()

    return data


def _backup(path: Path) -> Path:
    stamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    backup_path = path.with_name(f"{path.name}.backup.{stamp}")
    shutil.copy2(path, backup_path)
    return backup_path


def write_content(name: str, data: dict) -> Path:
    """Merge a partial document into the stored one and save it.

    Args:
        name: Document name
        data: Partial document from the admin UI

    Returns:
        Path: File that was written

    Raises:
        ContentNotFoundError: Unknown document name
        ContentStoreError: File could not be backed up or written

    Assumptions:
    - The previous file is copied to "<file>.backup.<YYYY-mm-dd_HHMMSS>"
    - An unreadable previous file is replaced, not merged
    - metadata.last_updated is always today
    """
    path = get_content_path(name)
    if path is None:
        raise ContentNotFoundError(f"Unknown content document: {name}")

    backup_path = None
    try:
        if path.exists():
            backup_path = _backup(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        existing: Any = {}
        if path.exists():
            try:
                existing = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, UnicodeDecodeError):
                existing = {}
        if not isinstance(existing, dict):
            existing = {}

        merged = merge_content(existing, data)
        if not isinstance(merged.get("metadata"), dict):
            merged["metadata"] = {}

        metadata = merged["metadata"]
        metadata["last_updated"] = _today()
        if not metadata.get("data_source"):
            metadata["data_source"] = DEFAULT_DATA_SOURCE
        if not metadata.get("description"):
            metadata["description"] = default_description(name)

        path.write_text(
            json.dumps(merged, indent=4, ensure_ascii=False),
            encoding="utf-8"
        )
    except OSError as e:
        raise ContentStoreError(str(e)) from e

    log_audit_event(
        operation="update",
        entity_type="content",
        entity_id=name,
        changes=data,
        file=path.name,
        backup=backup_path.name if backup_path else None,
    )

    return path
