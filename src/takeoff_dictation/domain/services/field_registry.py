"""
Field Registry.

Static table of spoken aliases resolved to canonical line-record fields,
grouped by dictation context. The registry is immutable; build a second
instance from different FieldSpecs for an alternate vocabulary.

Alias resolution rule: when several aliases are prefixes of the same
segment, the longest alias wins ("plate length" beats "length",
"drill punch" beats "drill").
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from takeoff_dictation.domain.constants import (
    CATEGORY_SYNONYMS,
    MATERIAL_TYPE_SYNONYMS,
    SHAPE_TYPE_SYNONYMS,
    SUB_CATEGORY_SYNONYMS,
)
from takeoff_dictation.domain.value_objects.dictation_context import DictationContext
from takeoff_dictation.domain.value_objects.field_spec import (
    FieldAlias,
    FieldGroup,
    FieldSpec,
    FieldType,
)

M, L, S = FieldGroup.MATERIAL, FieldGroup.LABOR, FieldGroup.SHARED

# fmt: off
DEFAULT_FIELD_SPECS: tuple[FieldSpec, ...] = (
    # 1. Identification
    FieldSpec("drawingNumber", FieldType.TEXT, S, ("drawing", "drawing number"), number=1, display_name="Drawing #"),
    FieldSpec("detailNumber", FieldType.TEXT, S, ("detail", "detail number"), number=2, display_name="Detail #"),
    FieldSpec("itemDescription", FieldType.TEXT, S, ("item", "item description", "description"), number=3, display_name="Item Description"),
    FieldSpec("category", FieldType.CATEGORICAL, M, ("category",), CATEGORY_SYNONYMS, number=4, display_name="Category"),
    FieldSpec("subCategory", FieldType.CATEGORICAL, M, ("subcategory", "sub category"), SUB_CATEGORY_SYNONYMS, number=5, display_name="Sub-Category"),
    # "material ..." is a context switch, so material type has no spoken alias
    FieldSpec("materialType", FieldType.CATEGORICAL, M, (), MATERIAL_TYPE_SYNONYMS, number=6, display_name="Material Type"),

    # 2. Material - rolled
    FieldSpec("shapeType", FieldType.CATEGORICAL, M, ("type", "shape", "shape type"), SHAPE_TYPE_SYNONYMS, number=7, display_name="Shape Type"),
    FieldSpec("sizeDesignation", FieldType.DESIGNATION, M, ("size", "spec"), number=8, display_name="Size"),
    FieldSpec("grade", FieldType.DESIGNATION, M, ("grade",), number=9, display_name="Grade"),
    FieldSpec("qty", FieldType.INTEGER, M, ("quantity", "qty"), number=10, display_name="Quantity"),
    FieldSpec("lengthFt", FieldType.FEET, M, ("length", "length feet", "length foot", "feet", "foot"), number=11, display_name="Length (ft)"),
    FieldSpec("lengthIn", FieldType.INCHES, M, ("inches", "inch", "length inches"), number=12, display_name="Length (in)"),

    # 2. Material - plate (numbers 7-11 when material type is Plate)
    FieldSpec("thickness", FieldType.THICKNESS, M, ("thickness", "thick", "plate thickness"), display_name="Thickness"),
    FieldSpec("width", FieldType.DECIMAL, M, ("width", "plate width"), display_name="Width"),
    FieldSpec("plateLength", FieldType.DECIMAL, M, ("plate length",), display_name="Plate Length"),
    FieldSpec("plateQty", FieldType.INTEGER, M, ("plate quantity", "plate qty"), display_name="Plate Qty"),
    FieldSpec("plateGrade", FieldType.DESIGNATION, M, ("plate grade",), display_name="Plate Grade"),

    # 3. Coating
    FieldSpec("coatingSystem", FieldType.COATING, M, ("coating", "coating system"), number=13, display_name="Coating System"),

    # 4. Labor
    FieldSpec("laborUnload", FieldType.DURATION, L, ("unload", "unloading"), number=14, display_name="Unload"),
    FieldSpec("laborCut", FieldType.DURATION, L, ("cut", "cutting"), number=15, display_name="Cut"),
    FieldSpec("laborCope", FieldType.DURATION, L, ("cope", "coping"), number=16, display_name="Cope"),
    FieldSpec("laborProcessPlate", FieldType.DURATION, L, ("process", "process plate", "processing"), number=17, display_name="Process"),
    FieldSpec("laborDrillPunch", FieldType.DURATION, L, ("drill", "punch", "drill punch", "drilling", "punching"), number=18, display_name="Drill/Punch"),
    FieldSpec("laborFit", FieldType.DURATION, L, ("fit", "fitting"), number=19, display_name="Fit"),
    FieldSpec("laborWeld", FieldType.DURATION, L, ("weld", "welding"), number=20, display_name="Weld"),
    FieldSpec("laborPrepClean", FieldType.DURATION, L, ("prep", "clean", "prep clean", "cleaning"), number=21, display_name="Prep/Clean"),
    FieldSpec("laborPaint", FieldType.DURATION, L, ("paint", "painting"), number=22, display_name="Paint"),
    FieldSpec("laborHandleMove", FieldType.DURATION, L, ("handle", "move", "handling", "handle move"), number=23, display_name="Handle/Move"),
    FieldSpec("laborLoadShip", FieldType.DURATION, L, ("load", "ship", "load ship", "loading", "shipping"), number=24, display_name="Load/Ship"),

    # 5. Admin
    FieldSpec("notes", FieldType.TEXT, S, ("notes", "note"), number=25, display_name="Notes"),
)
# fmt: on

# When material type is Plate, the rolled-member workflow slots address plate fields
PLATE_FIELD_NUMBERS = MappingProxyType(
    {
        7: "thickness",
        8: "width",
        9: "plateLength",
        10: "plateQty",
        11: "plateGrade",
    }
)


@dataclass(frozen=True)
class AliasMatch:
    """A field alias found at the start of a segment."""

    alias: FieldAlias
    spec: FieldSpec
    value_text: str  # text after the alias and separator, may be empty


@dataclass(frozen=True)
class AliasMention:
    """A field alias found anywhere in a piece of text."""

    alias: FieldAlias
    start: int
    end: int


def _phrase_words(phrase: str) -> str:
    return r"[\s-]+".join(re.escape(w) for w in phrase.split())


def _alias_pattern(phrase: str) -> re.Pattern[str]:
    words = _phrase_words(phrase)
    # alias, then ":" / "-" / whitespace / end, then the value
    return re.compile(rf"^{words}(?:\s*[:\-]\s*|\s+|$)(.*)$", re.IGNORECASE | re.DOTALL)


class FieldRegistry:
    """
    Resolves spoken aliases to canonical fields.

    Aliases are checked longest-first, so the first alias that matches a
    segment is also the longest one.
    """

    def __init__(
        self,
        specs: Iterable[FieldSpec] = DEFAULT_FIELD_SPECS,
        plate_field_numbers: Mapping[int, str] = PLATE_FIELD_NUMBERS,
    ) -> None:
        self._specs: dict[str, FieldSpec] = {}
        aliases: list[FieldAlias] = []

        for spec in specs:
            if spec.name in self._specs:
                raise ValueError(f"Duplicate field spec: {spec.name}")
            self._specs[spec.name] = spec
            aliases.extend(FieldAlias(a.lower(), spec.name, spec.group) for a in spec.aliases)

        self._check_alias_collisions(aliases)

        aliases.sort(key=lambda a: len(a.spoken_phrase), reverse=True)
        self._aliases = tuple(aliases)
        self._patterns = {a.spoken_phrase: _alias_pattern(a.spoken_phrase) for a in aliases}
        self._labor_by_group: dict[str, FieldAlias] = {}
        self._labor_mention = self._mention_pattern(self.labor_aliases())
        self._numbers = {s.number: s.name for s in self._specs.values() if s.number is not None}
        self._plate_numbers = dict(plate_field_numbers)

    def _mention_pattern(self, aliases: tuple[FieldAlias, ...]) -> re.Pattern[str] | None:
        # One alternation, longest first, so mentions never overlap
        branches = []
        for index, alias in enumerate(aliases):
            group = f"alias{index}"
            self._labor_by_group[group] = alias
            branches.append(rf"(?P<{group}>{_phrase_words(alias.spoken_phrase)})")
        if not branches:
            return None
        return re.compile(rf"\b(?:{'|'.join(branches)})\b", re.IGNORECASE)

    @staticmethod
    def _check_alias_collisions(aliases: list[FieldAlias]) -> None:
        """Reject one phrase naming two fields that can be active together."""
        seen: dict[str, FieldAlias] = {}
        for alias in aliases:
            other = seen.get(alias.spoken_phrase)
            if other is None:
                seen[alias.spoken_phrase] = alias
                continue
            overlapping = (
                FieldGroup.SHARED in (alias.group, other.group) or alias.group == other.group
            )
            if overlapping and other.canonical_field != alias.canonical_field:
                raise ValueError(
                    f"Alias {alias.spoken_phrase!r} maps to both "
                    f"{other.canonical_field} and {alias.canonical_field}"
                )

    def spec(self, name: str) -> FieldSpec:
        """Get the FieldSpec for a canonical field.

        Raises:
            KeyError: If the field is not registered
        """
        return self._specs[name]

    def specs(self) -> tuple[FieldSpec, ...]:
        return tuple(self._specs.values())

    def aliases_for(self, context: DictationContext) -> tuple[FieldAlias, ...]:
        """Aliases active in a context, longest first."""
        return tuple(a for a in self._aliases if a.applies_to(context))

    def labor_aliases(self) -> tuple[FieldAlias, ...]:
        """Aliases of labor-duration fields, longest first."""
        return tuple(a for a in self._aliases if a.group is FieldGroup.LABOR)

    def labor_mentions(self, text: str) -> tuple[AliasMention, ...]:
        """Every labor alias in text, in the order spoken."""
        if self._labor_mention is None:
            return ()
        return tuple(
            AliasMention(self._labor_by_group[m.lastgroup], m.start(), m.end())
            for m in self._labor_mention.finditer(text)
        )

    def match_prefix(self, segment: str, context: DictationContext) -> AliasMatch | None:
        """
        Find the alias a segment starts with.

        Args:
            segment: One comma-delimited piece of an utterance
            context: Current dictation context (selects active aliases)

        Returns:
            Longest matching alias with the trailing value text, or None
        """
        text = segment.strip()
        for alias in self.aliases_for(context):
            match = self._patterns[alias.spoken_phrase].match(text)
            if match:
                return AliasMatch(
                    alias=alias,
                    spec=self._specs[alias.canonical_field],
                    value_text=match.group(1).strip(),
                )
        return None

    def field_for_number(self, number: int, material_type: str | None = None) -> FieldSpec | None:
        """Get the field at a workflow position ("number 4" -> category)."""
        name = None
        if material_type == "Plate":
            name = self._plate_numbers.get(number)
        if name is None:
            name = self._numbers.get(number)
        return self._specs.get(name) if name else None
