#!/usr/bin/env python3
"""Example: compute Super Serial Card switch settings for a modem and a printer."""

import sys

from pyssc_dip import OperationMode, Parity, SerialCardConfig, relevant_fields, resolve, summarize
from pyssc_dip.errors import InvalidSettingError
from pyssc_dip.normalize import parse_baud_rate, parse_frame_format


def show(config: SerialCardConfig) -> None:
    settings = resolve(config)
    print("SW1:", " ".join("ON" if s else "OFF" for s in settings.sw1))
    print("SW2:", " ".join("ON" if s else "OFF" for s in settings.sw2))
    for line in summarize(config):
        print(f"  {line}")
    print(f"  Relevant fields: {', '.join(relevant_fields(config.operation_mode))}")
    print()


def main() -> None:
    try:
        # Modem at 2400 baud, 8N1, interrupts on
        data_bits, parity, stop_bits = parse_frame_format("8N1")
        modem = SerialCardConfig(
            operation_mode=OperationMode.MODEM,
            baud_rate=parse_baud_rate("2400"),
            data_bits=data_bits,
            parity=parity,
            stop_bits=stop_bits,
        )
        show(modem)

        # 80-column printer at 9600 baud with auto line feed
        printer = SerialCardConfig(
            operation_mode=OperationMode.PRINTER,
            line_width=80,
            auto_line_feed=True,
            parity=Parity.NONE,
        )
        show(printer)
    except InvalidSettingError as e:
        print(f"Invalid setting: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
