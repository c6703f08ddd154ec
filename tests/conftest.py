"""Shared fixtures for paperchaser tests."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from paperchaser.document import DriveObject, ResultRecord

DOC_ID = "1DocAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"
SHEET_ID = "1SheetBBBBBBBBBBBBBBBBBBBBBBBBBBB"
SLIDES_ID = "1SlidesCCCCCCCCCCCCCCCCCCCCCCCCCC"
FOLDER_ID = "1FolderDDDDDDDDDDDDDDDDDDDDDDDDDD"


def make_metadata(drive_id: str, mime: str = "application/pdf", **extra: Any) -> Dict[str, Any]:
    metadata: Dict[str, Any] = {
        "id": drive_id,
        "title": f"File {drive_id}",
        "mimeType": mime,
        "createdDate": "2021-07-01T10:00:00.000Z",
        "modifiedDate": "2021-07-02T10:00:00.000Z",
        "version": "7",
        "parents": [],
        "userPermission": {"id": "me", "role": "reader"},
        "owners": [],
        "capabilities": {"canEdit": False},
        "explicitlyTrashed": False,
    }
    metadata.update(extra)
    return metadata


def open_link(drive_id: str) -> str:
    return f"https://drive.google.com/open?id={drive_id}"


class FakeFetcher:
    """In-memory object fetcher.

    ``graph`` maps an identifier to the links its body contains; identifiers
    missing from it behave like inaccessible files.
    """

    def __init__(
        self,
        graph: Dict[str, List[str]],
        errors: Optional[Dict[str, Exception]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.graph = graph
        self.errors = errors or {}
        self.metadata = metadata or {}
        self.calls: List[str] = []
        self.on_fetch = None

    async def fetch(self, drive_id: str) -> Optional[DriveObject]:
        self.calls.append(drive_id)
        if self.on_fetch is not None:
            self.on_fetch(drive_id)
        if drive_id in self.errors:
            raise self.errors[drive_id]
        if drive_id not in self.graph:
            return None
        return DriveObject(
            id=drive_id,
            metadata=self.metadata.get(drive_id, make_metadata(drive_id)),
            links=list(self.graph[drive_id]),
        )


class RecordingSink:
    def __init__(self) -> None:
        self.records: List[ResultRecord] = []

    def append(self, record: ResultRecord) -> None:
        self.records.append(record)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def google_doc() -> Dict[str, Any]:
    """Trimmed Docs API response with one hyperlink and one URL in text."""
    return {
        "documentId": DOC_ID,
        "title": "Planning",
        "body": {
            "content": [
                {"sectionBreak": {"sectionStyle": {}}},
                {
                    "paragraph": {
                        "elements": [
                            {
                                "textRun": {
                                    "content": "Budget sheet",
                                    "textStyle": {
                                        "link": {"url": open_link(SHEET_ID)},
                                    },
                                }
                            },
                            {
                                "textRun": {
                                    "content": f"Deck: https://docs.google.com/presentation/d/{SLIDES_ID}/edit\n",
                                    "textStyle": {},
                                }
                            },
                        ]
                    }
                },
            ]
        },
    }
