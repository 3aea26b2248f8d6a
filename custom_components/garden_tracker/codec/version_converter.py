"""Version detection and upgrade of legacy save codes.

Older save codes are never decoded directly. They are first rewritten into
the current format by an ordered chain of single-step upgrades, each a pure
``str -> str`` function tagged with its source and target version:

* v0.1 -> v0.2: fixed two-letter crop tokens become the short alphabet
  (``To`` -> ``T``, ``Ap`` -> ``A``, ``Co`` stays ``Co``...).
* v0.2 -> v0.3: the crop section prefix ``CROPS-`` is renamed ``CR-``;
  fertilizer suffixes such as ``T.S`` are carried through unchanged.
* v0.3 -> v0.4: identity on every code seen so far; it only re-tags the
  version and normalizes a stray ``CROPS-`` prefix.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from .code_tables import FERTILIZER_TABLE, LEGACY_V01_CROP_TOKENS, V02_CROP_TABLE
from .const import (
    CROPS_PREFIX,
    CURRENT_VERSION,
    LEGACY_CROPS_PREFIX,
    ROW_SEPARATOR,
    SAVE_CODE_SEPARATOR,
    SUPPORTED_VERSIONS,
)
from .exceptions import ConversionError, UnknownCodeError, UnsupportedVersionError
from .models import ConversionResult

_LOGGER = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^v(\d+)\.(\d+)$")


def _version_key(tag: str) -> tuple[int, int]:
    match = _VERSION_RE.match(tag)
    if not match:
        raise UnsupportedVersionError(f"Unrecognized version tag '{tag}'")
    return int(match.group(1)), int(match.group(2))


def detect_version(code: str) -> str:
    """Return the version tag (e.g. ``"v0.2"``) a save code starts with.

    Raises:
        UnsupportedVersionError: If the tag is missing or unrecognized, or
            names a version newer than the current one.
    """
    tag = code.strip().split(SAVE_CODE_SEPARATOR, 1)[0]
    if not tag:
        raise UnsupportedVersionError("Save code has no version tag")
    if not _VERSION_RE.match(tag):
        raise UnsupportedVersionError(
            f"Save code has no version tag, found '{tag[:20]}'"
        )
    if _version_key(tag) > _version_key(CURRENT_VERSION):
        raise UnsupportedVersionError(
            f"Save code version {tag} is newer than supported {CURRENT_VERSION}"
        )
    if tag not in SUPPORTED_VERSIONS:
        raise UnsupportedVersionError(f"Unsupported save code version {tag}")
    return tag


def _split(code: str, version: str) -> tuple[str, str, list[str]]:
    """Split a code into its plot section, crop section and trailing sections."""
    sections = code.split(SAVE_CODE_SEPARATOR)
    if len(sections) < 3:
        raise ConversionError(
            f"Invalid {version} save code: expected version, plot and crop sections"
        )
    return sections[1], sections[2], sections[3:]


def _join(version: str, plots: str, crops: str, rest: list[str]) -> str:
    return SAVE_CODE_SEPARATOR.join([version, plots, crops, *rest])


def _crop_body(crops: str, version: str, prefixes: tuple[str, ...]) -> str:
    """Return the crop rows of a crop section, without its prefix."""
    for prefix in prefixes:
        if crops.startswith(prefix):
            return crops[len(prefix) :]
    found = crops.split(ROW_SEPARATOR, 1)[0]
    raise ConversionError(
        f"Invalid {version} save code: crop section starts with '{found}-', "
        f"expected {' or '.join(prefixes)}"
    )


def upgrade_v01_to_v02(code: str) -> str:
    """Re-encode v0.1 two-letter crop tokens into the v0.2 alphabet."""
    plots, crops, rest = _split(code, "v0.1")
    body = _crop_body(crops, "v0.1", (LEGACY_CROPS_PREFIX,))

    rows = []
    for row in body.split(ROW_SEPARATOR):
        if len(row) % 2:
            raise ConversionError(
                f"v0.1 crop row '{row}' is not made of two-letter tokens"
            )
        tokens = [row[i : i + 2] for i in range(0, len(row), 2)]
        try:
            rows.append("".join(LEGACY_V01_CROP_TOKENS[token] for token in tokens))
        except KeyError as err:
            raise ConversionError(f"Unknown v0.1 crop token '{err.args[0]}'") from None

    return _join("v0.2", plots, LEGACY_CROPS_PREFIX + ROW_SEPARATOR.join(rows), rest)


def upgrade_v02_to_v03(code: str) -> str:
    """Rename the ``CROPS-`` prefix to ``CR-`` after checking the v0.2 alphabet."""
    plots, crops, rest = _split(code, "v0.2")
    body = _crop_body(crops, "v0.2", (LEGACY_CROPS_PREFIX,))

    for row in body.split(ROW_SEPARATOR):
        try:
            V02_CROP_TABLE.scan_tiles(row, FERTILIZER_TABLE)
        except UnknownCodeError as err:
            raise ConversionError(f"Invalid v0.2 crop row '{row}': {err}") from err

    return _join("v0.3", plots, CROPS_PREFIX + body, rest)


def upgrade_v03_to_v04(code: str) -> str:
    """Re-tag a v0.3 code as v0.4.

    No structural difference between v0.3 and v0.4 codes is known; this is
    an identity transform until a real v0.3 code shows otherwise.
    """
    plots, crops, rest = _split(code, "v0.3")
    body = _crop_body(crops, "v0.3", (CROPS_PREFIX, LEGACY_CROPS_PREFIX))
    return _join("v0.4", plots, CROPS_PREFIX + body, rest)


@dataclass(frozen=True)
class UpgradeStep:
    """A single upgrade from one save-code version to the next."""

    source: str
    target: str
    transform: Callable[[str], str]


UPGRADE_STEPS: tuple[UpgradeStep, ...] = (
    UpgradeStep("v0.1", "v0.2", upgrade_v01_to_v02),
    UpgradeStep("v0.2", "v0.3", upgrade_v02_to_v03),
    UpgradeStep("v0.3", "v0.4", upgrade_v03_to_v04),
)


def detect_and_convert(raw: str) -> ConversionResult:
    """Upgrade a save code of any supported version to the current version.

    Args:
        raw: A bare save code.

    Returns:
        The current-version code and the version detected on input. A code
        that is already current is returned unchanged.

    Raises:
        UnsupportedVersionError: If the version tag is missing or unsupported.
        ConversionError: If a legacy token cannot be mapped.
    """
    code = raw.strip()
    original_version = detect_version(code)
    version = original_version

    for step in UPGRADE_STEPS:
        if step.source != version:
            continue
        code = step.transform(code)
        _LOGGER.debug("Upgraded save code %s -> %s: %s", step.source, step.target, code)
        version = step.target

    if version != CURRENT_VERSION:
        raise UnsupportedVersionError(
            f"No upgrade path from {original_version} to {CURRENT_VERSION}"
        )

    if original_version != CURRENT_VERSION:
        _LOGGER.info(
            "Converted %s save code to %s", original_version, CURRENT_VERSION
        )
    return ConversionResult(code=code, original_version=original_version)
