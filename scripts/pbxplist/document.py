"""Normalized top-level plist document."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from .nodes import PlistDictionary, PlistNull, PlistValue, from_python, to_python

ARCHIVE_VERSION = "archiveVersion"
OBJECT_VERSION = "objectVersion"
OBJECTS = "objects"
ROOT_OBJECT = "rootObject"
CLASSES = "classes"

STANDARD_FIELDS = (ARCHIVE_VERSION, OBJECT_VERSION, OBJECTS, ROOT_OBJECT, CLASSES)

logger = logging.getLogger("pbxplist.document")


@dataclass
class PlistDocument:
    """A parsed file whose five standard fields are always present."""

    archive_version: PlistValue = field(default_factory=PlistNull)
    object_version: PlistValue = field(default_factory=PlistNull)
    objects: PlistDictionary = field(default_factory=PlistDictionary)
    root_object: PlistValue = field(default_factory=PlistNull)
    classes: PlistDictionary = field(default_factory=PlistDictionary)
    extra: dict[str, PlistValue] = field(default_factory=dict)

    def fields(self) -> dict[str, PlistValue]:
        """All top-level fields by their on-disk names, standard fields first."""
        return {
            ARCHIVE_VERSION: self.archive_version,
            OBJECT_VERSION: self.object_version,
            OBJECTS: self.objects,
            ROOT_OBJECT: self.root_object,
            CLASSES: self.classes,
            **self.extra,
        }

    def get_object(self, identifier: str) -> PlistValue | None:
        return self.objects.get(identifier)

    def to_python(self) -> dict[str, Any]:
        return {key: to_python(value) for key, value in self.fields().items()}

    @classmethod
    def from_python(cls, data: Mapping[str, Any]) -> "PlistDocument":
        return normalize_document(PlistDictionary(entries={str(k): from_python(v) for k, v in data.items()}))


def _dictionary_field(parsed: PlistDictionary, key: str) -> PlistDictionary:
    value = parsed.get(key)
    if isinstance(value, PlistDictionary):
        return value
    if value is not None and not isinstance(value, PlistNull):
        logger.warning(f"Top-level '{key}' is a {value.kind}, not a dictionary; using an empty dictionary")
    return PlistDictionary()


def normalize_document(parsed: PlistDictionary) -> PlistDocument:
    return PlistDocument(
        archive_version=parsed.get(ARCHIVE_VERSION, PlistNull()),
        object_version=parsed.get(OBJECT_VERSION, PlistNull()),
        objects=_dictionary_field(parsed, OBJECTS),
        root_object=parsed.get(ROOT_OBJECT, PlistNull()),
        classes=_dictionary_field(parsed, CLASSES),
        extra={key: value for key, value in parsed.entries.items() if key not in STANDARD_FIELDS},
    )


__all__ = ["PlistDocument", "normalize_document", "STANDARD_FIELDS"]
