"""pyssc-dip: Apple II Super Serial Card DIP switch settings from plain configuration choices."""

__version__ = "0.1.0"

from .errors import InvalidSettingError, PySSCDipError
from .resolver import (
    frame_format,
    recommend_slot,
    relevant_fields,
    resolve,
    resolve_bank_one,
    resolve_bank_two,
    summarize,
)
from .tables import SwitchTables, get_default_tables
from .types import JumperMode, OperationMode, Parity, SerialCardConfig, Slot, SwitchBank, SwitchSettings

__all__ = [
    "__version__",
    "InvalidSettingError",
    "PySSCDipError",
    "frame_format",
    "recommend_slot",
    "relevant_fields",
    "resolve",
    "resolve_bank_one",
    "resolve_bank_two",
    "summarize",
    "SwitchTables",
    "get_default_tables",
    "JumperMode",
    "OperationMode",
    "Parity",
    "SerialCardConfig",
    "Slot",
    "SwitchBank",
    "SwitchSettings",
]
