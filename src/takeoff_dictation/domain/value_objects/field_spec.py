"""Field schema value objects.

A FieldSpec describes one canonical field of a line record: how it is
spoken (aliases), which dictation context activates it, and which
normalizer converts its raw spoken value.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from .dictation_context import DictationContext


class FieldType(StrEnum):
    """Type descriptor that selects the value normalizer."""

    CATEGORICAL = "categorical"  # synonym lookup, fallback uppercase
    INTEGER = "integer"  # first integer token
    DECIMAL = "decimal"  # first decimal number
    FEET = "feet"  # number with feet marker
    INCHES = "inches"  # number with inch marker
    THICKNESS = "thickness"  # fraction / mixed number with inch marker
    DURATION = "duration"  # hours + minutes -> decimal hours
    TEXT = "text"  # trimmed, case preserved
    DESIGNATION = "designation"  # uppercase code, e.g. W10X15, A992
    COATING = "coating"  # substring match against coating vocabulary


class FieldGroup(StrEnum):
    """Dictation group a field belongs to."""

    MATERIAL = "material"
    LABOR = "labor"
    SHARED = "shared"  # active in every context

    def is_active_in(self, context: DictationContext) -> bool:
        if self is FieldGroup.SHARED:
            return True
        if not context.is_set():
            return self is FieldGroup.MATERIAL
        return self.value == context.value


@dataclass(frozen=True)
class FieldSpec:
    """Canonical field definition (immutable value object).

    Attributes:
        name: Canonical schema identifier (e.g. "plateLength")
        field_type: Normalizer selector
        group: Context group that activates the field's aliases
        aliases: Spoken phrases that name the field, lowercase
        synonyms: Optional spoken -> canonical table for CATEGORICAL fields
        number: Optional position in the estimating workflow
        display_name: Human label for UI display
    """

    name: str
    field_type: FieldType
    group: FieldGroup
    aliases: tuple[str, ...] = ()
    synonyms: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    number: int | None = None
    display_name: str = ""

    @property
    def label(self) -> str:
        return self.display_name or self.name


@dataclass(frozen=True)
class FieldAlias:
    """One spoken alias resolved to a canonical field."""

    spoken_phrase: str
    canonical_field: str
    group: FieldGroup

    def applies_to(self, context: DictationContext) -> bool:
        return self.group.is_active_in(context)
