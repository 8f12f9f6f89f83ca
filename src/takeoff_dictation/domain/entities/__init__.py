# Domain entities

from .committed_line import CommittedLine
from .partial_record import FieldValue, PartialRecord

__all__ = ["CommittedLine", "FieldValue", "PartialRecord"]
