"""
Pattern sum type.

Each detected pattern is one of a closed set of frozen variants sharing a
``price`` field. Consumers dispatch on the concrete class (``match`` /
``isinstance``) or on ``pattern_type``.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Union

from ..data.models import BookSide


class PatternType(str, Enum):
    """Tag identifying a pattern variant."""
    ICEBERG_ORDER = "iceberg_order"
    SPOOFING = "spoofing"
    SUPPORT = "support"
    RESISTANCE = "resistance"
    ABSORPTION = "absorption"


@dataclass(frozen=True)
class Pattern:
    """Base for all pattern variants; never instantiated directly."""
    price: Decimal

    pattern_type: ClassVar[PatternType]


@dataclass(frozen=True)
class IcebergOrder(Pattern):
    """Large order executed as many visible fills at a similar price."""
    estimated_size: Decimal

    pattern_type: ClassVar[PatternType] = PatternType.ICEBERG_ORDER


@dataclass(frozen=True)
class Spoofing(Pattern):
    """
    Unusually large resting level.

    A single snapshot cannot show the order being withdrawn, so this is a
    size-based heuristic and not proof of spoofing.
    """
    side: BookSide

    pattern_type: ClassVar[PatternType] = PatternType.SPOOFING


@dataclass(frozen=True)
class Support(Pattern):
    """Large resting bid."""
    strength: Decimal

    pattern_type: ClassVar[PatternType] = PatternType.SUPPORT


@dataclass(frozen=True)
class Resistance(Pattern):
    """Large resting ask."""
    strength: Decimal

    pattern_type: ClassVar[PatternType] = PatternType.RESISTANCE


@dataclass(frozen=True)
class Absorption(Pattern):
    """Large traded volume without proportional price movement."""
    volume: Decimal

    pattern_type: ClassVar[PatternType] = PatternType.ABSORPTION


AnyPattern = Union[IcebergOrder, Spoofing, Support, Resistance, Absorption]
