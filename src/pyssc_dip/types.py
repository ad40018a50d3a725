"""Core data model: card modes, configuration snapshot, and switch bank results."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

BANK_SIZE = 7

# Config fields compared as ints by the resolver
_NUMERIC_FIELDS = ("data_bits", "stop_bits", "line_width")


class OperationMode(str, Enum):
    """What the card is driving; selects which SW2 branch applies."""

    MODEM = "modem"
    PRINTER = "printer"


class JumperMode(str, Enum):
    """Jumper block orientation. Printer: arrow points DOWN; Modem: arrow points UP."""

    MODEM = "modem"
    PRINTER = "printer"


class Parity(str, Enum):
    NONE = "none"
    ODD = "odd"
    EVEN = "even"


class Slot(str, Enum):
    """Recommended Apple II expansion slot."""

    SLOT_1 = "slot 1"
    SLOT_2 = "slot 2"

    @property
    def label(self) -> str:
        return self.value.title()


@dataclass(frozen=True)
class SerialCardConfig:
    """
    Immutable snapshot of every user choice. Fields irrelevant to the selected
    operation mode may hold anything; the resolver ignores them.
    """

    operation_mode: OperationMode = OperationMode.MODEM
    baud_rate: str = "9600"
    data_bits: int = 8
    parity: Parity = Parity.NONE
    stop_bits: int = 1
    line_width: int = 80
    auto_line_feed: bool = False
    enable_interrupts: bool = True
    return_delay: bool = False
    jumper_mode: JumperMode = JumperMode.MODEM

    def __post_init__(self) -> None:
        # Form widgets hand these over as strings ("40", "8"); anything else is kept as given.
        for name in _NUMERIC_FIELDS:
            value = getattr(self, name)
            if isinstance(value, str) and value.strip().isdecimal():
                object.__setattr__(self, name, int(value.strip()))


@dataclass(frozen=True)
class SwitchBank:
    """One 7-position DIP switch bank; True means ON. Positions are 1-based."""

    label: str
    switches: tuple[bool, ...]

    def __post_init__(self) -> None:
        if len(self.switches) != BANK_SIZE:
            raise ValueError(f"{self.label} must have {BANK_SIZE} switches, got {len(self.switches)}")

    def position(self, n: int) -> bool:
        """Return the state of switch n (1..7)."""
        if not 1 <= n <= BANK_SIZE:
            raise IndexError(f"Switch position must be 1..{BANK_SIZE}, got {n}")
        return self.switches[n - 1]

    def __iter__(self) -> Iterator[bool]:
        return iter(self.switches)

    def __len__(self) -> int:
        return len(self.switches)


@dataclass(frozen=True)
class SwitchSettings:
    """Result of resolver.resolve(config): both banks and the recommended slot."""

    sw1: SwitchBank
    sw2: SwitchBank
    slot: Slot
