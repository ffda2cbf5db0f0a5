#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from mma_app.config.loader import ConfigError, ConfigLoader
from mma_app.config.validation import ConfigValidator, ValidationError


def validate_instrument_config(loader: ConfigLoader, instrument_id: str) -> List[ValidationError]:
    """Validate the merged configuration for a specific instrument."""
    config = loader.merge_config(instrument_id)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("🔍 Validating analytics configuration...")

    loader = ConfigLoader.create()

    test_instruments = [
        "BTC-USD",
        "ETH-USD",
        "SOL-USD",
        "UNKNOWN-INSTRUMENT",  # Should use defaults
    ]

    all_valid = True

    for instrument_id in test_instruments:
        print(f"\n📊 Validating {instrument_id}...")

        errors = validate_instrument_config(loader, instrument_id)
        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.section}.{error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"✅ {instrument_id} configuration is valid")

    print("\n📋 Testing call-level overrides...")
    test_overrides = {
        "tape": {"block_threshold": 2.0},
        "patterns": {"absorption_price_range": 5},
    }

    try:
        config = loader.build_config("BTC-USD", test_overrides)
        print(f"✅ Override validation passed (block_threshold={config.tape.block_threshold})")
    except ConfigError as e:
        print(f"❌ Override validation failed: {e}")
        all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
