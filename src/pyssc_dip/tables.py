"""SwitchTables: load embedded JSON via importlib.resources, read-only baud and width lookup."""

import json
import logging
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Any, Mapping

logger = logging.getLogger(__name__)

# Fallback rows used when a lookup misses. These are fixed card conventions.
DEFAULT_BAUD_RATE = "9600"
DEFAULT_LINE_WIDTH = 80

_TABLES_RESOURCE = "pyssc_dip.data.ssc_switch_tables"

BaudBits = tuple[bool, bool, bool, bool]
WidthBits = tuple[bool, bool]


def _parse_bits(raw: Any, size: int, key: str) -> tuple[bool, ...]:
    """Validate a JSON switch pattern: a list of exactly `size` booleans."""
    if not isinstance(raw, list) or len(raw) != size:
        raise ValueError(f"Switch pattern for {key!r} must be a list of {size} booleans, got {raw!r}")
    if not all(isinstance(bit, bool) for bit in raw):
        raise ValueError(f"Switch pattern for {key!r} must contain only booleans, got {raw!r}")
    return tuple(raw)


def _parse_baud_rates(entries: list[dict[str, Any]]) -> dict[str, BaudBits]:
    table: dict[str, BaudBits] = {}
    for entry in entries:
        value = str(entry["value"])
        if value in table:
            raise ValueError(f"Duplicate baud rate in table: {value}")
        table[value] = _parse_bits(entry["sw1"], 4, value)  # type: ignore[assignment]
    return table


def _parse_line_widths(entries: list[dict[str, Any]]) -> dict[int, WidthBits]:
    table: dict[int, WidthBits] = {}
    for entry in entries:
        columns = int(entry["columns"])
        if columns in table:
            raise ValueError(f"Duplicate line width in table: {columns}")
        table[columns] = _parse_bits(entry["sw2"], 2, str(columns))  # type: ignore[assignment]
    return table


class SwitchTables:
    """
    Read-only baud-rate (SW1 1-4) and line-width (SW2 3-4) tables.
    Loaded once from packaged JSON, or built from table_override for tests and variants.
    """

    def __init__(self, table_override: dict[str, Any] | None = None) -> None:
        if table_override is not None:
            data = table_override
            source = "override"
        else:
            pkg, name = _TABLES_RESOURCE.rsplit(".", 1)
            json_name = f"{name}.json"
            try:
                with resources.files(pkg).joinpath(json_name).open("r", encoding="utf-8") as f:
                    data = json.load(f)
            except FileNotFoundError:
                raise FileNotFoundError(f"Switch table resource not found: {pkg}/{json_name}") from None
            source = json_name

        baud = _parse_baud_rates(data.get("baud_rates", []))
        width = _parse_line_widths(data.get("line_widths", []))
        if DEFAULT_BAUD_RATE not in baud:
            raise ValueError(f"Baud table must contain the fallback rate {DEFAULT_BAUD_RATE!r}")
        if DEFAULT_LINE_WIDTH not in width:
            raise ValueError(f"Width table must contain the fallback width {DEFAULT_LINE_WIDTH}")

        self._baud: Mapping[str, BaudBits] = MappingProxyType(baud)
        self._width: Mapping[int, WidthBits] = MappingProxyType(width)
        self._card = str(data.get("card", "unknown"))
        logger.debug(
            "SwitchTables loaded from %s: %d baud rates, %d line widths",
            source,
            len(self._baud),
            len(self._width),
        )

    def baud_bits(self, baud_rate: str) -> BaudBits:
        """SW1 positions 1-4 for baud_rate (exact match); the 9600 row when unknown."""
        bits = self._baud.get(baud_rate)
        if bits is None:
            logger.debug("Unknown baud rate %r, using %s", baud_rate, DEFAULT_BAUD_RATE)
            return self._baud[DEFAULT_BAUD_RATE]
        return bits

    def width_bits(self, line_width: int) -> WidthBits:
        """SW2 positions 3-4 for a printer line width; the 80-column row when unknown."""
        bits = self._width.get(line_width)
        if bits is None:
            logger.debug("Unknown line width %r, using %d", line_width, DEFAULT_LINE_WIDTH)
            return self._width[DEFAULT_LINE_WIDTH]
        return bits

    @property
    def card(self) -> str:
        return self._card

    @property
    def baud_table(self) -> Mapping[str, BaudBits]:
        return self._baud

    @property
    def width_table(self) -> Mapping[int, WidthBits]:
        return self._width

    @property
    def baud_rates(self) -> tuple[str, ...]:
        """Legal baud rates in table order (slowest first)."""
        return tuple(self._baud)

    @property
    def line_widths(self) -> tuple[int, ...]:
        return tuple(self._width)


@lru_cache(maxsize=None)
def get_default_tables() -> SwitchTables:
    """Load and return the packaged Super Serial Card tables (cached for the process)."""
    return SwitchTables()
