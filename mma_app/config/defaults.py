"""Default configuration parameters for the analytics components."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class BookParams:
    """Order book analysis parameters."""
    depth: Optional[int] = None                          # Levels per side, None for all
    reject_crossed_book: bool = False                    # Validator: best bid >= best ask


@dataclass(frozen=True)
class TapeParams:
    """Tape reading parameters."""
    block_threshold: Decimal = Decimal("10")             # Min quantity for a block trade
    cluster_time_window: int = 2                         # Max distance from cluster start
    min_cluster_size: int = 3                            # Min trades per reported cluster


@dataclass(frozen=True)
class ProfileParams:
    """Volume profile parameters."""
    tick_size: Decimal = Decimal("1")                    # Bucket width
    value_area_pct: Decimal = Decimal("0.70")            # Share of volume in value area


@dataclass(frozen=True)
class PatternParams:
    """Pattern detection thresholds."""
    iceberg_min_fills: int = 3
    iceberg_price_tolerance: Decimal = Decimal("0")
    spoofing_threshold: Decimal = Decimal("50")
    support_resistance_threshold: Decimal = Decimal("10")
    absorption_volume_threshold: Decimal = Decimal("10")
    absorption_price_range: Decimal = Decimal("1")


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    book: BookParams
    tape: TapeParams
    profile: ProfileParams
    patterns: PatternParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        book=BookParams(),
        tape=TapeParams(),
        profile=ProfileParams(),
        patterns=PatternParams(),
    )
