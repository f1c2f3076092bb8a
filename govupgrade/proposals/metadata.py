"""
Upgrade plan metadata parsing.

The plan info field is free-form. By convention it holds JSON such as
{"binaries": {"linux/amd64": "https://github.com/.../veranad-linux-amd64"}}.
Everything here is best-effort: parse failures yield None, never an error.
"""

import json
import re
from functools import lru_cache
from typing import Optional

from ..config.defaults import MetadataParams
from ..data.models import ParsedPlanInfo, UpgradePlan
from ..logging.config import get_logger

logger = get_logger(__name__)

_DEFAULT_PARAMS = MetadataParams()

_RELEASE_URL = re.compile(
    r"^(https://github\.com/[^/]+/[^/]+/releases/download/)([^/]+)/(.+)$"
)


@lru_cache(maxsize=32)
def _filename_patterns(binary_name: str) -> tuple[re.Pattern, re.Pattern]:
    tool = re.escape(binary_name)
    canonical = re.compile(rf"^{tool}-(?:linux|darwin)-")
    # Non-greedy: the first platform segment after the tool name wins
    versioned = re.compile(rf"^{tool}-.*?-((?:linux|darwin)-.+)$")
    return canonical, versioned


@lru_cache(maxsize=32)
def _version_patterns(binary_name: str, version_pattern: str) -> tuple[re.Pattern, ...]:
    tool = re.escape(binary_name)
    return (
        re.compile(rf"/releases/download/({version_pattern})", re.IGNORECASE),
        re.compile(rf"{tool}-({version_pattern})", re.IGNORECASE),
        re.compile(rf"({version_pattern})", re.IGNORECASE),
    )


def fix_binary_url(url: str, binary_name: str = _DEFAULT_PARAMS.binary_name) -> str:
    """
    Repair release URLs whose filename repeats the version tag.

    https://github.com/o/r/releases/download/v0.9-dev.7/veranad-v0.9-dev.7-linux-arm64
    becomes
    https://github.com/o/r/releases/download/v0.9-dev.7/veranad-linux-arm64

    URLs already in {tool}-{platform} form, and URLs that are not GitHub
    release downloads, are returned unchanged.
    """
    if not url or not isinstance(url, str):
        return url

    try:
        match = _RELEASE_URL.match(url)
        if not match:
            return url

        base_path, tag, filename = match.groups()
        canonical, versioned = _filename_patterns(binary_name)

        if canonical.match(filename):
            return url

        platform_match = versioned.match(filename)
        if platform_match:
            return f"{base_path}{tag}/{binary_name}-{platform_match.group(1)}"

        return url
    except (re.error, TypeError, ValueError) as e:
        logger.debug("Binary URL left unchanged", url=url, error=str(e))
        return url


def parse_plan_info(info: str, params: MetadataParams = _DEFAULT_PARAMS) -> Optional[ParsedPlanInfo]:
    """
    Parse a plan info string and normalize any binary URLs in it.

    Args:
        info: Raw plan.info value
        params: Metadata parameters (binary name used for URL repair)

    Returns:
        ParsedPlanInfo, or None if info is empty, not JSON, or not a JSON object
    """
    if not info or not isinstance(info, str):
        return None

    try:
        parsed = json.loads(info)
    except (ValueError, TypeError, RecursionError):
        logger.debug("Plan info is not JSON", info_length=len(info))
        return None

    if not isinstance(parsed, dict):
        return None

    binaries = None
    raw_binaries = parsed.get("binaries")
    if isinstance(raw_binaries, dict):
        binaries = {
            platform: fix_binary_url(url, params.binary_name)
            for platform, url in raw_binaries.items()
            if isinstance(url, str)
        }

    version = parsed.get("version")
    binary = parsed.get("binary")

    return ParsedPlanInfo(
        binaries=binaries,
        version=version if isinstance(version, str) and version else None,
        binary=binary if isinstance(binary, str) and binary else None,
        raw=parsed,
    )


def select_binary_url(binaries: Optional[dict[str, str]],
                      params: MetadataParams = _DEFAULT_PARAMS) -> Optional[str]:
    """Pick the binary URL by platform priority, else the first non-empty one."""
    if not binaries:
        return None

    for platform in params.platform_priority:
        if binaries.get(platform):
            return binaries[platform]

    return next((url for url in binaries.values() if url), None)


def version_from_url(url: str, params: MetadataParams = _DEFAULT_PARAMS) -> Optional[str]:
    """Extract a version token from a binary URL, trying patterns in order."""
    for pattern in _version_patterns(params.binary_name, params.version_pattern):
        match = pattern.search(url)
        if match and match.group(1):
            return match.group(1)
    return None


def extract_binary_version(plan: UpgradePlan,
                           proposal_title: Optional[str] = None,
                           params: MetadataParams = _DEFAULT_PARAMS) -> Optional[str]:
    """
    Derive the upgrade's version string.

    Sources, later ones overriding earlier ones when present:
    1. plan.name
    2. a version token found in the preferred binary URL
    3. an explicit "version" (else "binary") field of the plan info
    The proposal title is scanned only when none of these yields a value.
    """
    version: Optional[str] = plan.name or None

    parsed_info = parse_plan_info(plan.info, params)
    if parsed_info is not None:
        binary_url = select_binary_url(parsed_info.binaries, params)
        if binary_url:
            url_version = version_from_url(binary_url, params)
            if url_version:
                version = url_version

        if parsed_info.version:
            version = parsed_info.version
        elif parsed_info.binary:
            version = parsed_info.binary

    if not version and proposal_title:
        title_match = _version_patterns(params.binary_name, params.version_pattern)[2].search(proposal_title)
        if title_match:
            version = title_match.group(1)

    return version
