"""Data structures representing fetched Drive objects and crawl output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

MIME_DOCUMENT = "application/vnd.google-apps.document"
MIME_SPREADSHEET = "application/vnd.google-apps.spreadsheet"
MIME_PRESENTATION = "application/vnd.google-apps.presentation"
MIME_FOLDER = "application/vnd.google-apps.folder"

FOLDER_URL = "https://drive.google.com/drive/folders/{id}"
OPEN_URL = "https://drive.google.com/open?id={id}"

RESULT_FIELDS: List[str] = [
    "id",
    "title",
    "mime",
    "created",
    "modified",
    "version",
    "parent_folders",
    "permissions",
    "owners",
    "can_edit",
    "trashed",
]


@dataclass(slots=True)
class DriveObject:
    """Raw fetch output for one Drive identifier."""

    id: str
    metadata: Dict[str, Any]
    body: Any = None
    links: List[Any] = field(default_factory=list)

    @property
    def mime_type(self) -> str:
        return str(self.metadata.get("mimeType") or "")


@dataclass(frozen=True, slots=True)
class ResultRecord:
    """One row of crawl output, built from Drive v2 file metadata."""

    id: str
    title: str
    mime: str
    created: str
    modified: str
    version: str
    parent_folders: str
    permissions: str
    owners: str
    can_edit: Optional[bool]
    trashed: Optional[bool]

    @classmethod
    def from_metadata(
        cls, metadata: Dict[str, Any], drive_id: str = ""
    ) -> "ResultRecord":
        parent_folders = " ".join(
            FOLDER_URL.format(id=parent_id)
            for parent_id in (_parent_id(parent) for parent in _as_list(metadata.get("parents")))
            if parent_id
        )

        user_permission = metadata.get("userPermission")
        permissions = (
            f"{user_permission.get('id', '')}:{user_permission.get('role', '')}"
            if isinstance(user_permission, dict) and user_permission
            else ""
        )

        owners = "; ".join(
            _format_owner(owner)
            for owner in _as_list(metadata.get("owners"))
            if isinstance(owner, dict)
        )

        capabilities = metadata.get("capabilities")
        if not isinstance(capabilities, dict):
            capabilities = {}

        return cls(
            id=str(metadata.get("id") or drive_id),
            title=str(metadata.get("title", "")),
            mime=str(metadata.get("mimeType", "")),
            created=str(metadata.get("createdDate", "")),
            modified=str(metadata.get("modifiedDate", "")),
            version=str(metadata.get("version", "")),
            parent_folders=parent_folders,
            permissions=permissions,
            owners=owners,
            can_edit=capabilities.get("canEdit"),
            trashed=metadata.get("explicitlyTrashed"),
        )

    def to_row(self) -> List[str]:
        """Values in ``RESULT_FIELDS`` order, booleans as ``true``/``false``."""
        return [_cell(getattr(self, name)) for name in RESULT_FIELDS]


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _parent_id(parent: Any) -> str:
    """Parents are ``{"id": ...}`` objects; bare ID strings are accepted too."""
    if isinstance(parent, dict):
        return str(parent.get("id") or "")
    if isinstance(parent, str):
        return parent
    return ""


def _format_owner(owner: Dict[str, Any]) -> str:
    email = owner.get("emailAddress") or ""
    name = f"({owner['displayName']})" if owner.get("displayName") else ""
    return f"{email} {name}".strip()


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
