"""Crop and fertilizer code tables for garden save codes.

Save codes store every tile as a short code of one or two characters. Codes
are not fixed width, so a run of concatenated codes is split with a greedy
longest-match scan: the two-character lookahead is tried first and only
when it is not a known code is a single character consumed. Single-character
codes are always upper case and the second character of a two-character
code is always lower case, so the greedy scan never mis-splits a run such
as ``CCoCr`` (Carrot, Cotton, Corn).

A crop code may carry its tile's fertilizer as a ``.`` suffix, as in
``T.S`` (Tomato with Speedy Gro).
"""

from __future__ import annotations

import logging

from .const import SUFFIX_SEPARATOR
from .exceptions import UnknownCodeError, UnknownCropError

_LOGGER = logging.getLogger(__name__)

NONE_CODE = "N"
NONE_NAME = "None"

# Current (v0.4) crop codes
CROP_CODES: dict[str, str] = {
    "N": NONE_NAME,
    "T": "Tomato",
    "P": "Potato",
    "R": "Rice",
    "W": "Wheat",
    "C": "Carrot",
    "O": "Onion",
    "Co": "Cotton",
    "B": "Blueberry",
    "A": "Apple",
    "Cr": "Corn",
    "S": "Spicy Pepper",
    "Cb": "Napa Cabbage",
    "Bk": "Bok Choy",
    "Pm": "Rockhopper Pumpkin",
    "Bt": "Batterfly Bean",
}

FERTILIZER_CODES: dict[str, str] = {
    "N": NONE_NAME,
    "S": "Speedy Gro",
    "Q": "Quality Up",
    "W": "Weed Block",
    "H": "Harvest Boost",
    "Y": "Hydrate Pro",
}

# v0.1 used fixed two-letter tokens; value is the v0.2 token.
LEGACY_V01_CROP_TOKENS: dict[str, str] = {
    "Na": "N",
    "To": "T",
    "Po": "P",
    "Ri": "R",
    "Wh": "W",
    "Ca": "C",
    "On": "O",
    "Co": "Co",
    "Bl": "B",
    "Ap": "A",
    "Cr": "Cr",
}

# v0.2 predates the v0.3 crops (Napa Cabbage, Bok Choy, Pumpkin, Beans).
V02_CROP_CODES: dict[str, str] = {
    code: name
    for code, name in CROP_CODES.items()
    if code not in ("Cb", "Bk", "Pm", "Bt")
}

SIZE_SINGLE = "single"
SIZE_BUSH = "bush"
SIZE_TREE = "tree"

# Footprint of one plant of each crop
CROP_SIZES: dict[str, dict[str, str | int]] = {
    "Tomato": {"size": SIZE_SINGLE, "tiles": 1},
    "Potato": {"size": SIZE_SINGLE, "tiles": 1},
    "Rice": {"size": SIZE_SINGLE, "tiles": 1},
    "Wheat": {"size": SIZE_SINGLE, "tiles": 1},
    "Carrot": {"size": SIZE_SINGLE, "tiles": 1},
    "Onion": {"size": SIZE_SINGLE, "tiles": 1},
    "Cotton": {"size": SIZE_SINGLE, "tiles": 1},
    "Corn": {"size": SIZE_SINGLE, "tiles": 1},
    "Napa Cabbage": {"size": SIZE_SINGLE, "tiles": 1},
    "Bok Choy": {"size": SIZE_SINGLE, "tiles": 1},
    "Blueberry": {"size": SIZE_BUSH, "tiles": 4},
    "Spicy Pepper": {"size": SIZE_BUSH, "tiles": 4},
    "Batterfly Bean": {"size": SIZE_BUSH, "tiles": 4},
    "Rockhopper Pumpkin": {"size": SIZE_BUSH, "tiles": 4},
    "Apple": {"size": SIZE_TREE, "tiles": 9},
}


def crop_size(name: str) -> tuple[str, int]:
    """Return the (size class, tiles per plant) of a crop.

    Crops missing from the size table count as single-tile plants.
    """
    entry = CROP_SIZES.get(name)
    if entry is None:
        _LOGGER.debug("No size entry for crop '%s', assuming single", name)
        return SIZE_SINGLE, 1
    return str(entry["size"]), int(entry["tiles"])


class CodeTable:
    """Bidirectional mapping between save-code tokens and names."""

    def __init__(
        self,
        kind: str,
        codes: dict[str, str],
        unknown_name_error: type[UnknownCodeError] = UnknownCodeError,
    ) -> None:
        """Initialize the table.

        Args:
            kind: What the table names, used in error messages ("crop").
            codes: Mapping of one- or two-character code to name.
            unknown_name_error: Exception raised by ``encode`` for a name
                with no code.
        """
        if any(not 1 <= len(code) <= 2 for code in codes):
            raise ValueError(f"{kind} codes must be 1 or 2 characters")
        self.kind = kind
        self._by_code = dict(codes)
        self._by_name = {name: code for code, name in codes.items()}
        self._unknown_name_error = unknown_name_error

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def decode(self, code: str) -> str:
        """Return the name for a single code."""
        try:
            return self._by_code[code]
        except KeyError:
            raise UnknownCodeError(
                f"Unknown {self.kind} code '{code}'", token=code
            ) from None

    def encode(self, name: str) -> str:
        """Return the code for a name."""
        try:
            return self._by_name[name]
        except KeyError:
            raise self._unknown_name_error(
                f"Unknown {self.kind} '{name}'", token=name
            ) from None

    def match(self, run: str, i: int) -> str:
        """Return the longest code of the table starting at position i.

        Raises:
            UnknownCodeError: When no code starts at position i. The error
                names the two-character token when it looks like one (an
                upper-case letter followed by a lower-case one), otherwise
                the single character at the cursor.
        """
        pair = run[i : i + 2]
        if len(pair) == 2 and pair in self._by_code:
            return pair
        if run[i] in self._by_code:
            return run[i]
        token = pair if len(pair) == 2 and pair[1].islower() else run[i]
        raise UnknownCodeError(
            f"Unknown {self.kind} code '{token}' at position {i} of '{run}'",
            token=token,
        )

    def scan(self, run: str) -> list[str]:
        """Split a run of concatenated codes, longest match first.

        Args:
            run: The concatenated codes, e.g. ``"CCoCr"``.

        Returns:
            The codes in order, e.g. ``["C", "Co", "Cr"]``.

        Raises:
            UnknownCodeError: When neither the two-character lookahead nor
                the single character at the cursor is a known code.
        """
        tokens: list[str] = []
        i = 0
        while i < len(run):
            code = self.match(run, i)
            tokens.append(code)
            i += len(code)
        return tokens

    def scan_tiles(
        self, run: str, suffix_table: CodeTable
    ) -> list[tuple[str, str | None]]:
        """Split a run of codes that may carry a suffix code each.

        A suffix follows its code after a ``.``, so ``"T.SPR.Q"`` splits
        into ``[("T", "S"), ("P", None), ("R", "Q")]``. Suffixes are looked
        up in ``suffix_table``.

        Raises:
            UnknownCodeError: When a code or suffix is unknown, or a ``.``
                is not followed by a suffix.
        """
        tiles: list[tuple[str, str | None]] = []
        i = 0
        while i < len(run):
            code = self.match(run, i)
            i += len(code)
            suffix = None
            if run.startswith(SUFFIX_SEPARATOR, i):
                i += len(SUFFIX_SEPARATOR)
                if i >= len(run):
                    raise UnknownCodeError(
                        f"Missing {suffix_table.kind} code after '{code}.' "
                        f"at the end of '{run}'",
                        token=SUFFIX_SEPARATOR,
                    )
                suffix = suffix_table.match(run, i)
                i += len(suffix)
            tiles.append((code, suffix))
        return tiles

    def prefix_pairs(self) -> list[tuple[str, str]]:
        """Return every (short, long) pair where one code prefixes another."""
        return sorted(
            (short, long)
            for short in self._by_code
            for long in self._by_code
            if len(short) < len(long) and long.startswith(short)
        )


CROP_TABLE = CodeTable("crop", CROP_CODES, unknown_name_error=UnknownCropError)
FERTILIZER_TABLE = CodeTable("fertilizer", FERTILIZER_CODES)
V02_CROP_TABLE = CodeTable("v0.2 crop", V02_CROP_CODES)
