"""Normalize and validate user-entered card settings into the legal enumerated values."""

import re

from .errors import InvalidSettingError
from .tables import SwitchTables, get_default_tables
from .types import JumperMode, OperationMode, Parity

# Data bits + parity letter + stop bits, e.g. 8N1, 7e2
_FRAME_PATTERN = re.compile(r"^([78])([NOE])([12])$", re.IGNORECASE)

# Optional "baud"/"bps" unit after the number
_BAUD_PATTERN = re.compile(r"^(\d+)\s*(baud|bps)?$", re.IGNORECASE)

_PARITY_ALIASES = {
    "n": Parity.NONE,
    "none": Parity.NONE,
    "o": Parity.ODD,
    "odd": Parity.ODD,
    "e": Parity.EVEN,
    "even": Parity.EVEN,
}

_DATA_BITS = (7, 8)
_STOP_BITS = (1, 2)


def _clean(field: str, raw: str) -> str:
    s = raw.strip().lower()
    if not s:
        raise InvalidSettingError(field, raw, f"{field} cannot be empty")
    return s


def parse_operation_mode(raw: str) -> OperationMode:
    """'modem' or 'printer', any case."""
    s = _clean("operation_mode", raw)
    try:
        return OperationMode(s)
    except ValueError:
        raise InvalidSettingError("operation_mode", raw, f"Operation mode must be modem or printer, got {raw!r}") from None


def parse_jumper_mode(raw: str) -> JumperMode:
    """
    Jumper orientation: 'modem'/'up' or 'printer'/'down'.
    The arrow on the jumper block points UP for modems and DOWN for printers.
    """
    s = _clean("jumper_mode", raw)
    if s in ("up", "modem"):
        return JumperMode.MODEM
    if s in ("down", "printer"):
        return JumperMode.PRINTER
    raise InvalidSettingError("jumper_mode", raw, f"Jumper must be modem/up or printer/down, got {raw!r}")


def parse_baud_rate(raw: str, tables: SwitchTables | None = None) -> str:
    """
    Return the canonical baud string ('9600') for input like '9600', ' 9600 baud'.
    Only rates present in the card's baud table are accepted.
    """
    tables = tables or get_default_tables()
    s = _clean("baud_rate", raw)
    m = _BAUD_PATTERN.match(s)
    if not m:
        raise InvalidSettingError("baud_rate", raw, f"Malformed baud rate: {raw!r}")
    value = str(int(m.group(1)))
    if value not in tables.baud_table:
        legal = ", ".join(tables.baud_rates)
        raise InvalidSettingError("baud_rate", raw, f"Unsupported baud rate {raw!r}; expected one of {legal}")
    return value


def _parse_choice(field: str, raw: str | int, choices: tuple[int, ...], text: str | None = None) -> int:
    s = _clean(field, str(raw)) if text is None else text
    try:
        value = int(s)
    except ValueError:
        raise InvalidSettingError(field, raw) from None
    if value not in choices:
        legal = " or ".join(str(c) for c in choices)
        raise InvalidSettingError(field, raw, f"{field} must be {legal}, got {raw!r}")
    return value


def parse_data_bits(raw: str | int) -> int:
    return _parse_choice("data_bits", raw, _DATA_BITS)


def parse_stop_bits(raw: str | int) -> int:
    return _parse_choice("stop_bits", raw, _STOP_BITS)


def parse_parity(raw: str) -> Parity:
    """'none'/'odd'/'even' or the single letters N/O/E."""
    s = _clean("parity", raw)
    parity = _PARITY_ALIASES.get(s)
    if parity is None:
        raise InvalidSettingError("parity", raw, f"Parity must be none, odd or even, got {raw!r}")
    return parity


def parse_line_width(raw: str | int, tables: SwitchTables | None = None) -> int:
    """Printer line width in columns; accepts '80' or '80col'."""
    tables = tables or get_default_tables()
    s = _clean("line_width", str(raw))
    s = s.removesuffix("columns").removesuffix("cols").removesuffix("col").strip()
    return _parse_choice("line_width", raw, tables.line_widths, text=s)


def parse_frame_format(raw: str) -> tuple[int, Parity, int]:
    """
    Split compact frame notation into (data_bits, parity, stop_bits).

    '8N1' -> (8, Parity.NONE, 1); '7e2' -> (7, Parity.EVEN, 2).
    Raises InvalidSettingError for anything else.
    """
    s = _clean("frame_format", raw)
    m = _FRAME_PATTERN.match(s)
    if not m:
        raise InvalidSettingError("frame_format", raw, f"Frame format must look like 8N1 or 7E2, got {raw!r}")
    return int(m.group(1)), _PARITY_ALIASES[m.group(2).lower()], int(m.group(3))
