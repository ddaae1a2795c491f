"""Data models for the HomeKit catalog.

Primary Entry Points:
    Catalog: Ordered services and characteristics
    ServiceEntry / CharacteristicEntry: Catalog entries
    ValueKind: Primitive category of a characteristic value
    RelationshipResult: Transient output of the metadata parser

Model Hierarchy:
    Catalog
    ├── ServiceEntry - identifier, names, docs, required/optional lists
    └── CharacteristicEntry - identifier, names, docs, value kind
"""

from homekit_catalog.models.catalog import (
    Catalog,
    CharacteristicEntry,
    ServiceEntry,
    ValueKind,
    lower_first,
)
from homekit_catalog.models.metadata import (
    HAPCharacteristicRecord,
    HAPServiceCharacteristics,
    HAPServiceRecord,
    coerce_string_list,
)
from homekit_catalog.models.relationships import (
    ReconciliationSummary,
    RelationshipResult,
    ServiceRelationship,
)

__all__ = [
    # Catalog
    "Catalog",
    "CharacteristicEntry",
    "ServiceEntry",
    "ValueKind",
    "lower_first",
    # Metadata records
    "HAPCharacteristicRecord",
    "HAPServiceCharacteristics",
    "HAPServiceRecord",
    "coerce_string_list",
    # Relationships
    "ReconciliationSummary",
    "RelationshipResult",
    "ServiceRelationship",
]
