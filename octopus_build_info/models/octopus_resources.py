from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Space:
    id: str
    name: str
    slug: str = ""
    is_default: bool = False

    @classmethod
    def from_api(cls, item: dict):
        return cls(id=item["Id"], name=item["Name"], slug=item.get("Slug") or "",
                   is_default=bool(item.get("IsDefault")))


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    slug: str = ""

    @classmethod
    def from_api(cls, item: dict):
        return cls(id=item["Id"], name=item["Name"], slug=item.get("Slug") or "")


@dataclass(frozen=True)
class Environment:
    id: str
    name: str
    slug: str = ""

    @classmethod
    def from_api(cls, item: dict):
        return cls(id=item["Id"], name=item["Name"], slug=item.get("Slug") or "")


@dataclass(frozen=True)
class BuildInformationEntry:
    package_id: str
    vcs_commit_number: Optional[str] = None

    @classmethod
    def from_api(cls, item: dict):
        return cls(package_id=item.get("PackageId") or "", vcs_commit_number=item.get("VcsCommitNumber") or None)


@dataclass(frozen=True)
class Change:
    version: Optional[str] = None
    build_information: List[BuildInformationEntry] = field(default_factory=list)

    @classmethod
    def from_api(cls, item: dict):
        return cls(
            version=item.get("Version") or None,
            build_information=[BuildInformationEntry.from_api(entry) for entry in item.get("BuildInformation") or []],
        )


@dataclass(frozen=True)
class Deployment:
    id: str
    created: Optional[str] = None
    changes: List[Change] = field(default_factory=list)

    @classmethod
    def from_api(cls, item: dict):
        return cls(
            id=item["Id"],
            created=item.get("Created"),
            changes=[Change.from_api(change) for change in item.get("Changes") or []],
        )
