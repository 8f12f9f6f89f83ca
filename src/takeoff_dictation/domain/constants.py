"""
Shared Domain Constants.

Central location for the spoken vocabulary used across dictation services.
All tables are immutable; alternate vocabularies are passed to the services
that consume them rather than patched here.
"""

from types import MappingProxyType

# =============================================================================
# Lifecycle Commands
# =============================================================================
# Whole-utterance matches only. "stop" + "recording" may appear anywhere.

COMMIT_WORDS = frozenset(["enter", "done", "complete", "finish"])

NEW_RECORD_PHRASES = ("new line", "newline")

STOP_WORDS = ("stop", "recording")

# "line id 3", "lineid L 3", "line id three, quantity 5"
LINE_ID_PREFIXES = ("line id", "lineid")

DEFAULT_LINE_ID_PREFIX = "L"


# =============================================================================
# Context Switches
# =============================================================================

MATERIAL_KEYWORD = "material"
LABOR_KEYWORD = "labor"


# =============================================================================
# Numbered Field Shortcut
# =============================================================================

NUMBERED_FIELD_KEYWORD = "number"


# =============================================================================
# Number Words
# =============================================================================

UNIT_WORDS = MappingProxyType(
    {
        "zero": 0,
        "one": 1,
        "two": 2,
        "three": 3,
        "four": 4,
        "five": 5,
        "six": 6,
        "seven": 7,
        "eight": 8,
        "nine": 9,
        "ten": 10,
        "eleven": 11,
        "twelve": 12,
        "thirteen": 13,
        "fourteen": 14,
        "fifteen": 15,
        "sixteen": 16,
        "seventeen": 17,
        "eighteen": 18,
        "nineteen": 19,
    }
)

TENS_WORDS = MappingProxyType(
    {
        "twenty": 20,
        "thirty": 30,
        "forty": 40,
        "fifty": 50,
        "sixty": 60,
        "seventy": 70,
        "eighty": 80,
        "ninety": 90,
    }
)

# Denominators for spoken fractions ("three eighths", "a half")
FRACTION_WORDS = MappingProxyType(
    {
        "half": 2,
        "halves": 2,
        "quarter": 4,
        "quarters": 4,
        "eighth": 8,
        "eighths": 8,
        "sixteenth": 16,
        "sixteenths": 16,
    }
)


# =============================================================================
# Enumerated Synonyms
# =============================================================================

CATEGORY_SYNONYMS = MappingProxyType(
    {
        "columns": "Columns",
        "column": "Columns",
        "beams": "Beams",
        "beam": "Beams",
        "misc": "Misc Metals",
        "misc metals": "Misc Metals",
        "miscellaneous": "Misc Metals",
        "plates": "Plates",
        "plate": "Plates",
    }
)

SUB_CATEGORY_SYNONYMS = MappingProxyType(
    {
        "base plate": "Base Plate",
        "gusset": "Gusset",
        "stiffener": "Stiffener",
        "clip": "Clip",
        "brace": "Brace",
        "other": "Other",
    }
)

SHAPE_TYPE_SYNONYMS = MappingProxyType(
    {
        "wide flange": "W",
        "w shape": "W",
        "w": "W",
        "hss": "HSS",
        "tube": "HSS",
        "channel": "C",
        "c shape": "C",
        "c": "C",
        "angle": "L",
        "l shape": "L",
        "l": "L",
        "tee": "T",
        "t shape": "T",
        "t": "T",
        "pipe": "PIPE",
    }
)

MATERIAL_TYPE_SYNONYMS = MappingProxyType(
    {
        "rolled": "Rolled",
        "plate": "Plate",
        "material": "Material",
    }
)

# Substring -> canonical coating system; anything else is "None"
COATING_VOCABULARY = (
    ("paint", "Paint"),
    ("powder", "Powder"),
    ("galv", "Galv"),
)
NO_COATING = "None"

# Filler words dropped from spoken size/grade designations
DESIGNATION_FILLER_WORDS = frozenset(["size", "designation", "member", "grade"])
