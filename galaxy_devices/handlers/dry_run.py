"""Dry-run handler: records commands instead of sending them"""

from typing import List

from ..base import CommandSink, DeviceNotConnectedError


class DryRunHandler(CommandSink):
    """Collects every command in order; prints them in debug mode"""

    def __init__(self, debug: bool = False, **_ignored):
        super().__init__()
        self.debug = debug
        self.sent: List[str] = []
        self._connected = False

    @property
    def name(self) -> str:
        return "Dry run"

    @property
    def is_connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        self._connected = True

    def disconnect(self) -> None:
        self._connected = False

    def send_command(self, line: str) -> None:
        if not self._connected:
            raise DeviceNotConnectedError("Device not connected")
        self.sent.append(line)
        if self.debug:
            print(f"[DRY RUN] {line}")

    def clear(self) -> None:
        self.sent = []
