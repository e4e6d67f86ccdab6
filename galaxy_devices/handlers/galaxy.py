"""Galaxy ASCII protocol handler (TCP, newline-terminated path=value lines)"""

import logging
import re
import select
import socket
import threading
from typing import Iterable, List, Optional

from ..base import (
    CommandSink,
    DeviceCommunicationError,
    DeviceNotConnectedError,
)

logger = logging.getLogger(__name__)


class GalaxyHandler(CommandSink):
    """Handler for a Galaxy processor's ASCII control port"""

    # Protocol constants
    DEFAULT_PORT = 25003
    TX_EOL = '\n'
    RX_EOL = re.compile(r'\r\n|\n|\r')
    SUBSCRIBE_PREFIX = '+'

    # Timing
    CONNECT_TIMEOUT = 3.0  # seconds
    READ_TIMEOUT = 0.1  # seconds per read_lines() poll
    RECV_SIZE = 4096

    def __init__(self, host: str, port: int = DEFAULT_PORT, debug: bool = False):
        super().__init__()
        self.host = host
        self.port = int(port)
        self.debug = debug
        self.sock: Optional[socket.socket] = None
        self._rx_buffer = ''
        # Serializes sendall() across send_batch() worker threads
        self._write_lock = threading.Lock()

    @property
    def name(self) -> str:
        return "Galaxy"

    @property
    def is_connected(self) -> bool:
        return self.sock is not None

    def connect(self) -> None:
        """Open the control socket"""
        if self.sock:
            return
        try:
            self.sock = socket.create_connection((self.host, self.port), timeout=self.CONNECT_TIMEOUT)
        except OSError as e:
            raise DeviceCommunicationError(f"Cannot connect to {self.host}:{self.port}: {e}") from e
        self._rx_buffer = ''
        logger.debug("Galaxy: connected to %s:%d", self.host, self.port)

    def disconnect(self) -> None:
        """Close the control socket"""
        if self.sock:
            try:
                self.sock.close()
            finally:
                self.sock = None
                self._rx_buffer = ''

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.disconnect()

    def _write(self, payload: str) -> None:
        data = payload.encode('utf-8')
        with self._write_lock:
            if not self.sock:
                raise DeviceNotConnectedError("Device not connected")
            try:
                self.sock.sendall(data)
            except OSError as e:
                raise DeviceCommunicationError(f"Write to {self.host}:{self.port} failed: {e}") from e

    def send_command(self, line: str) -> None:
        """Send one command line"""
        if self.debug:
            logger.debug("  sent: %s", line)
        self._write(line + self.TX_EOL)

    def send_lines(self, lines: Iterable[str]) -> int:
        """Send lines as one write, preserving order"""
        lines = list(lines)
        if not lines:
            return 0
        if self.debug:
            for line in lines:
                logger.debug("  sent: %s", line)
        self._write(self.TX_EOL.join(lines) + self.TX_EOL)
        return len(lines)

    def subscribe(self, paths: Iterable[str]) -> None:
        """Subscribe to paths and request their current values"""
        lines = []
        for path in paths:
            lines.append(f"{self.SUBSCRIBE_PREFIX}{path}")
            lines.append(path)
        self.send_lines(lines)

    def read_lines(self, timeout: float = READ_TIMEOUT) -> List[str]:
        """Return complete lines received so far (partial lines stay buffered)

        Polls with select() so the socket's own timeout, which also governs
        writes, is left alone.
        """
        if not self.sock:
            raise DeviceNotConnectedError("Device not connected")
        try:
            readable, _, _ = select.select([self.sock], [], [], timeout)
            if not readable:
                return []
            chunk = self.sock.recv(self.RECV_SIZE)
        except socket.timeout:
            return []
        except OSError as e:
            raise DeviceCommunicationError(f"Read from {self.host}:{self.port} failed: {e}") from e
        if not chunk:
            self.disconnect()
            raise DeviceCommunicationError(f"Connection to {self.host}:{self.port} closed by device")

        self._rx_buffer += chunk.decode('utf-8', errors='replace')
        parts = self.RX_EOL.split(self._rx_buffer)
        self._rx_buffer = parts.pop()
        lines = [p.strip() for p in parts if p.strip()]
        if self.debug:
            for line in lines:
                logger.debug("  recv: %s", line)
        return lines
