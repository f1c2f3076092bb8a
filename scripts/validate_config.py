#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from govupgrade.config.loader import ConfigLoader
from govupgrade.config.validation import ConfigValidator, ValidationError


def validate_network_config(loader: ConfigLoader, network_id: str) -> List[ValidationError]:
    """Validate configuration for a specific network."""
    config = loader.merge_config(network_id)
    return ConfigValidator.validate_config(config)


def configured_networks(loader: ConfigLoader) -> List[str]:
    """Network ids declared in networks.yaml."""
    networks_file = loader.config_dir / "networks.yaml"
    if not networks_file.exists():
        return []
    with open(networks_file) as f:
        return list((yaml.safe_load(f) or {}).get("networks", {}) or {})


def main():
    """Main validation function."""
    print("🔍 Validating govupgrade configuration...")

    loader = ConfigLoader.create()

    # Unknown networks fall back to the defaults
    networks = configured_networks(loader) + ["unknown-network"]

    all_valid = True

    for network_id in networks:
        print(f"\n🌐 Validating {network_id}...")

        errors = validate_network_config(loader, network_id)
        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"✅ {network_id} configuration is valid")

    print("\n📋 Testing caller overrides...")
    test_overrides = {
        "tally": {"scale_exponent": 10},
        "chain": {"display_denom": "uVNA", "denom_exponent": 0},
    }
    errors = ConfigValidator.validate_config(loader.merge_config("verana-testnet", test_overrides))
    if errors:
        print("❌ Override validation failed:")
        for error in errors:
            print(f"  • {error.field}: {error.message}")
        all_valid = False
    else:
        print("✅ Override validation passed")

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
