from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping, Optional, TypedDict

from typing_extensions import Literal

SOURCE_NAME = "Ecad"

Role = Literal["Author", "Publisher", "Versionist", "SubPublisher"]

CATEGORIES: Mapping[str, Role] = MappingProxyType(
    {
        "CA": "Author",
        "E": "Publisher",
        "V": "Versionist",
        "SE": "SubPublisher",
    }
)


class SourceReference(TypedDict):
    source_system_name: str
    source_record_id: str


class Pseudonym(TypedDict):
    name: str
    is_primary: bool


class RightHolder(TypedDict):
    registry_person_id: str
    name: str
    role: Role
    share: float
    society_name: Optional[str]
    registry_number: Optional[str]
    pseudonyms: List[Pseudonym]
    source_references: List[SourceReference]


class Work(TypedDict):
    registry_work_id: str
    external_code: str
    title: str
    status: str
    created_at: str
    right_holders: List[RightHolder]
    source_references: List[SourceReference]


def source_reference(record_id: str) -> SourceReference:
    return {"source_system_name": SOURCE_NAME, "source_record_id": record_id}
