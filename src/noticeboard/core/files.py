"""File browser items and breadcrumbs - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ItemKind(Enum):
    FOLDER = "folder"
    FILE = "file"


@dataclass(frozen=True)
class DataItem:
    """A folder or file in the remote hierarchy."""

    id: str
    name: str
    kind: ItemKind
    parent_id: str | None = None
    file_url: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict) -> "DataItem":
        created = None
        if isinstance(data.get("createdAt"), str):
            try:
                created = datetime.fromisoformat(data["createdAt"].replace("Z", "+00:00"))
            except ValueError:
                created = None
        parent = data.get("parentId")
        return cls(
            id=str(data["_id"]),
            name=data.get("name") or "",
            kind=ItemKind(data.get("type", "file")),
            parent_id=str(parent) if parent else None,
            file_url=data.get("fileUrl"),
            created_at=created,
        )


@dataclass(frozen=True)
class Breadcrumb:
    id: str | None
    name: str


HOME = Breadcrumb(id=None, name="Home")


def build_breadcrumbs(ancestors: list[DataItem]) -> list[Breadcrumb]:
    """
    Breadcrumb trail for a folder.

    `ancestors` is the full path root -> current folder, as returned by a
    single path lookup. Raises ValueError if it is not an unbroken chain of
    folders starting at the root.
    """
    crumbs = [HOME]
    expected_parent = None
    for item in ancestors:
        if item.kind is not ItemKind.FOLDER:
            raise ValueError(f"Path contains a non-folder item: {item.name}")
        if item.parent_id != expected_parent:
            raise ValueError(f"Broken folder path at {item.name}")
        crumbs.append(Breadcrumb(id=item.id, name=item.name))
        expected_parent = item.id
    return crumbs


def split_items(items: list[DataItem]) -> tuple[list[DataItem], list[DataItem]]:
    """
    Split a folder listing into folders and files.

    Returns: (folders, files)
    """
    folders, files = [], []
    for item in items:
        match item.kind:
            case ItemKind.FOLDER:
                folders.append(item)
            case ItemKind.FILE:
                files.append(item)
    return folders, files


def search_items(items: list[DataItem], query: str) -> list[DataItem]:
    """Case-insensitive name search. Empty query matches everything."""
    query = query.strip().lower()
    if not query:
        return list(items)
    return [i for i in items if query in i.name.lower()]
