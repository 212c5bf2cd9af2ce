"""A small serial-port link for sending detection codes."""

from __future__ import annotations

import serial

__all__ = ["SerialLink"]


class SerialLink:
    """An 8N1 serial connection that is opened lazily and closed on exit.

    An integer *port* names the Windows-style device ``COM<n>``; a string is
    used as given and may be a pyserial URL.
    """

    def __init__(self, port=2, baudrate: int = 9600):
        self.port = f"COM{port}" if isinstance(port, int) else str(port)
        self.baudrate = int(baudrate)
        self._conn = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None and self._conn.is_open

    def open(self) -> None:
        """Open the port; does nothing if it is already open."""
        if self.is_open:
            return
        self._conn = serial.serial_for_url(
            self.port,
            baudrate=self.baudrate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            timeout=0,
            write_timeout=5,
        )

    def close(self) -> None:
        """Close the port if it is open."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def send(self, data) -> int:
        """Write *data* (bytes or text) and return its length; 0 when closed."""
        if not self.is_open:
            return 0
        payload = data.encode("ascii") if isinstance(data, str) else bytes(data)
        self._conn.write(payload)
        return len(payload)

    def read(self, limit: int) -> bytes:
        """Return up to *limit* of the bytes already waiting; empty when closed."""
        if not self.is_open:
            return b""
        available = self._conn.in_waiting
        if not available or limit <= 0:
            return b""
        return self._conn.read(min(available, limit))

    def waiting(self) -> int:
        """Return the number of bytes waiting to be read; 0 when closed."""
        if not self.is_open:
            return 0
        return self._conn.in_waiting

    def __enter__(self) -> SerialLink:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()