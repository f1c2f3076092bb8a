"""Default configuration parameters for the governance analysis engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassifierParams:
    """Message type tags used to classify proposal messages."""
    upgrade_message_type: str = "/cosmos.upgrade.v1beta1.MsgSoftwareUpgrade"
    upgrade_message_marker: str = "MsgSoftwareUpgrade"      # Substring match
    cancel_upgrade_message_type: str = "/cosmos.upgrade.v1beta1.MsgCancelUpgrade"
    legacy_content_message_type: str = "/cosmos.gov.v1.MsgExecLegacyContent"


@dataclass(frozen=True)
class MetadataParams:
    """Plan info parsing and version extraction parameters."""
    binary_name: str = "veranad"                            # Release artifact prefix
    platform_priority: tuple = (
        "linux/amd64",
        "linux/arm64",
        "darwin/amd64",
        "darwin/arm64",
    )
    version_pattern: str = r"v[\d.]+(?:-[a-z]+\.\d+)?"      # Case-insensitive


@dataclass(frozen=True)
class TallyParams:
    """Vote tally and turnout parameters."""
    scale_exponent: int = 8                                 # 100 * 10^6 fixed point
    two_decimals_at_pct: int = 10                           # >= 10% -> 2 decimals
    three_decimals_at_pct: int = 1                          # >= 1% -> 3 decimals
    unavailable: str = "N/A"


@dataclass(frozen=True)
class ChainParams:
    """Native token denomination parameters."""
    display_denom: str = "VNA"
    denom_exponent: int = 6


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class EngineConfig:
    """Complete engine configuration."""
    classifier: ClassifierParams
    metadata: MetadataParams
    tally: TallyParams
    chain: ChainParams
    logging: LoggingParams


def get_default_config() -> EngineConfig:
    """Get the default configuration instance."""
    return EngineConfig(
        classifier=ClassifierParams(),
        metadata=MetadataParams(),
        tally=TallyParams(),
        chain=ChainParams(),
        logging=LoggingParams(),
    )
