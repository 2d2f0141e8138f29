"""
Item field registry.

Answers the questions the record normalizer asks about a field:
is it known at all, does the item type use a type-specific synonym for it,
and is it valid for the item type. Loaded from item_schema.yaml.
"""

import logging
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).parent / "item_schema.yaml"


def _flatten(values: Iterable[Any]) -> list[str]:
    """Flatten one level of nesting (YAML anchors expand to nested lists)."""
    flat: list[str] = []
    for value in values:
        if isinstance(value, list):
            flat.extend(_flatten(value))
        else:
            flat.append(str(value))
    return flat


class ItemSchema:
    """
    Item types, their valid fields and their base-field synonyms.

    Usage:
        schema = ItemSchema.load()
        schema.type_specific_field("webpage", "publicationTitle")  # "websiteTitle"
    """

    def __init__(
        self,
        item_types: dict[str, set[str]],
        base_mappings: dict[str, dict[str, str]] | None = None,
        base_fields: Iterable[str] = (),
        version: str = "",
    ):
        self.version = version
        self._type_fields = {name: frozenset(fields) for name, fields in item_types.items()}
        self._base_mappings = {name: dict(m) for name, m in (base_mappings or {}).items()}

        known: set[str] = set(base_fields)
        for fields in self._type_fields.values():
            known.update(fields)
        for mapping in self._base_mappings.values():
            known.update(mapping.keys())
            known.update(mapping.values())
        self._known_fields = frozenset(known)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ItemSchema":
        item_types: dict[str, set[str]] = {}
        base_mappings: dict[str, dict[str, str]] = {}

        for type_name, spec in (data.get("item_types") or {}).items():
            spec = spec or {}
            item_types[type_name] = set(_flatten(spec.get("fields") or []))
            if spec.get("base_mappings"):
                base_mappings[type_name] = {
                    str(base): str(specific)
                    for base, specific in spec["base_mappings"].items()
                }

        return cls(
            item_types=item_types,
            base_mappings=base_mappings,
            base_fields=_flatten(data.get("base_fields") or []),
            version=str(data.get("schema_version", "")),
        )

    @classmethod
    def load(cls, path: Path | None = None) -> "ItemSchema":
        """
        Load a schema file.

        Args:
            path: YAML schema path (None = packaged item_schema.yaml)

        Returns:
            ItemSchema
        """
        schema_path = path or DEFAULT_SCHEMA_PATH
        with open(schema_path, encoding="utf-8") as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}

        schema = cls.from_dict(data)
        logger.debug(
            f"Loaded item schema {schema.version or '?'} from {schema_path} "
            f"({len(schema._type_fields)} item types)"
        )
        return schema

    @property
    def item_types(self) -> list[str]:
        return sorted(self._type_fields)

    def is_known_item_type(self, item_type: str) -> bool:
        return item_type in self._type_fields

    def is_known_field(self, field: str) -> bool:
        return field in self._known_fields

    def type_specific_field(self, item_type: str, base_field: str) -> str | None:
        """Synonym of ``base_field`` for ``item_type``, or None if it has none."""
        return self._base_mappings.get(item_type, {}).get(base_field)

    def is_valid_for_type(self, field: str, item_type: str) -> bool:
        return field in self._type_fields.get(item_type, frozenset())


@lru_cache(maxsize=1)
def default_schema() -> ItemSchema:
    """Packaged schema, loaded once."""
    return ItemSchema.load()
