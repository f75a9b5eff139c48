"""Localization entries and the record identity rule shared by export and reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

BLUEPRINTS_MARKER = "blueprints/"
ID_SEPARATOR = ","


def _frozen_mapping(value: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(value or {}))


@dataclass(frozen=True)
class LocalizationEntry:
    """One source string with its known translations, as produced by a text source."""

    key: str
    namespace: str
    native_culture: str
    native_text: str
    translations: Mapping[str, str] = field(default_factory=dict)
    context: str | None = None
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "translations", _frozen_mapping(self.translations))
        object.__setattr__(self, "metadata", _frozen_mapping(self.metadata))

    def localized_text(self, culture: str) -> str | None:
        """Return the non-empty text for ``culture`` or None."""
        if culture == self.native_culture:
            return self.native_text or None
        return self.translations.get(culture) or None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LocalizationEntry:
        return cls(
            key=str(data["key"]),
            namespace=str(data.get("namespace") or ""),
            native_culture=str(data["native_culture"]),
            native_text=str(data.get("native_text") or ""),
            translations={str(k): str(v) for k, v in (data.get("translations") or {}).items()},
            context=str(data["context"]) if data.get("context") is not None else None,
            metadata={str(k): str(v) for k, v in (data.get("metadata") or {}).items()},
        )


def composite_record_id(namespace: str, key: str, *, use_combined: bool = True) -> str:
    """Build the Gridly record id for an entry.

    Combined ids are ``namespace,key``; blueprint namespaces are dropped and
    leave only the ``,key`` marker.
    """
    if not use_combined:
        return key
    if BLUEPRINTS_MARKER in namespace:
        return f"{ID_SEPARATOR}{key}"
    return f"{namespace}{ID_SEPARATOR}{key}"


def strip_namespace(record_id: str) -> str:
    """Drop everything up to and including the first comma of a remote record id."""
    _, sep, rest = record_id.partition(ID_SEPARATOR)
    return rest if sep else record_id


@dataclass(frozen=True, order=True)
class RecordRef:
    """Identity of a record as ``(path, id)``."""

    id: str
    path: str

    @classmethod
    def from_entry(cls, entry: LocalizationEntry) -> RecordRef:
        return cls(id=entry.key, path=entry.namespace)

    @classmethod
    def from_remote(cls, record_id: str, path: str) -> RecordRef:
        """Build a ref from an exported record id, dropping its namespace prefix."""
        return cls(id=strip_namespace(record_id), path=path)

    def deletion_id(self) -> str:
        """Format the id the records endpoint expects when deleting this record."""
        if not self.path:
            return self.id
        if self.path.startswith(BLUEPRINTS_MARKER):
            return f"{ID_SEPARATOR}{self.id}"
        return f"{self.path}{ID_SEPARATOR}{self.id}"


# Both sides of a reconciliation pass share the same value type; remote refs
# are always namespace-stripped.
LocalRecordRef = RecordRef
RemoteRecordRef = RecordRef


@dataclass(frozen=True)
class RemoteRow:
    """One row of a view export, record id exactly as exported."""

    id: str
    path: str

    def to_ref(self) -> RecordRef:
        return RecordRef.from_remote(self.id, self.path)


def local_refs_for(entries: Iterable[LocalizationEntry]) -> list[RecordRef]:
    return [RecordRef.from_entry(entry) for entry in entries]
