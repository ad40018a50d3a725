"""Resolve a SerialCardConfig into SW1/SW2 DIP switch banks and a recommended slot."""

import logging

from .tables import SwitchTables, get_default_tables
from .types import JumperMode, OperationMode, Parity, SerialCardConfig, Slot, SwitchBank, SwitchSettings

logger = logging.getLogger(__name__)

# SW2-7 is only set for 40-column printers.
NARROW_LINE_WIDTH = 40

_COMMON_LEADING_FIELDS = ("baud_rate",)
_COMMON_TRAILING_FIELDS = ("auto_line_feed", "enable_interrupts")
_MODE_FIELDS: dict[OperationMode, tuple[str, ...]] = {
    OperationMode.MODEM: ("data_bits", "parity", "stop_bits"),
    OperationMode.PRINTER: ("line_width", "return_delay"),
}

_PARITY_LETTER = {Parity.NONE: "N", Parity.ODD: "O", Parity.EVEN: "E"}


def resolve_bank_one(config: SerialCardConfig, tables: SwitchTables | None = None) -> SwitchBank:
    """
    SW1: baud rate on 1-4, modem mode on 5, 6 and 7 always ON.
    Unknown baud rates resolve to the 9600 row.
    """
    tables = tables or get_default_tables()
    baud = tables.baud_bits(config.baud_rate)
    is_modem = config.operation_mode == OperationMode.MODEM
    return SwitchBank("SW1", (*baud, is_modem, True, True))


def _modem_bank_two(config: SerialCardConfig) -> tuple[bool, bool, bool, bool]:
    data_is_8 = config.data_bits == 8
    # Parity bits do not depend on stop bits.
    sw3 = config.parity == Parity.ODD
    sw4 = config.parity == Parity.NONE
    # Stop bits decide SW2-1 regardless of data bits.
    sw1 = config.stop_bits == 1
    return sw1, data_is_8, sw3, sw4


def _printer_bank_two(config: SerialCardConfig, tables: SwitchTables) -> tuple[bool, bool, bool, bool]:
    # Printer mode is always 8 data bits, 1 stop bit.
    sw3, sw4 = tables.width_bits(config.line_width)
    return True, config.return_delay, sw3, sw4


def resolve_bank_two(config: SerialCardConfig, tables: SwitchTables | None = None) -> SwitchBank:
    """
    SW2: data format (modem) or printer options on 1-4, auto line feed on 5,
    interrupts on 6, and the 40-column printer flag on 7.
    """
    tables = tables or get_default_tables()
    if config.operation_mode == OperationMode.PRINTER:
        head = _printer_bank_two(config, tables)
    else:
        head = _modem_bank_two(config)
    narrow = config.operation_mode == OperationMode.PRINTER and config.line_width == NARROW_LINE_WIDTH
    return SwitchBank("SW2", (*head, config.auto_line_feed, config.enable_interrupts, narrow))


def recommend_slot(config: SerialCardConfig) -> Slot:
    """Printers conventionally go in slot 1, modems in slot 2."""
    return Slot.SLOT_1 if config.operation_mode == OperationMode.PRINTER else Slot.SLOT_2


def relevant_fields(mode: OperationMode) -> tuple[str, ...]:
    """Names of the SerialCardConfig fields that influence the banks in this mode."""
    return _COMMON_LEADING_FIELDS + _MODE_FIELDS[mode] + _COMMON_TRAILING_FIELDS


def resolve(config: SerialCardConfig, tables: SwitchTables | None = None) -> SwitchSettings:
    """Resolve both banks and the recommended slot in one call."""
    tables = tables or get_default_tables()
    settings = SwitchSettings(
        sw1=resolve_bank_one(config, tables),
        sw2=resolve_bank_two(config, tables),
        slot=recommend_slot(config),
    )
    logger.debug("Resolved %s -> SW1=%s SW2=%s", config, settings.sw1.switches, settings.sw2.switches)
    return settings


def frame_format(config: SerialCardConfig) -> str:
    """Compact data/parity/stop notation, e.g. 8N1."""
    letter = _PARITY_LETTER.get(config.parity, "?")
    return f"{config.data_bits}{letter}{config.stop_bits}"


def summarize(config: SerialCardConfig) -> list[str]:
    """Human-readable configuration summary, one line per item."""
    if config.jumper_mode == JumperMode.PRINTER:
        jumper = "Arrow DOWN (Printer)"
    else:
        jumper = "Arrow UP (Modem)"
    is_modem = config.operation_mode == OperationMode.MODEM

    lines = [
        f"Jumper Block: {jumper}",
        f"Operation Mode: {'Modem' if is_modem else 'Printer'}",
        f"Baud Rate: {config.baud_rate}",
    ]
    if is_modem:
        parity = config.parity.value if isinstance(config.parity, Parity) else config.parity
        plural = "s" if config.stop_bits == 2 else ""
        lines.append(
            f"Data Format: {config.data_bits} data bits, {parity} parity, {config.stop_bits} stop bit{plural}"
        )
    else:
        lines.append(f"Line Width: {config.line_width} columns")
    lines.append(f"Recommended Slot: {recommend_slot(config).label}")
    return lines
