"""Serial port discovery, opening, sending and background reading."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable

import serial
from serial.tools import list_ports

from .state import PortSettings

READ_TIMEOUT = 1.0
READ_CHUNK = 1024


def find_ports() -> list[str]:
    """Return the device names of the serial ports present on the system."""
    return [info.device for info in list_ports.comports()]


def open_port(settings: PortSettings):
    """Open a serial port (or pyserial URL) with the given settings."""
    return serial.serial_for_url(
        settings.port,
        baudrate=settings.baud_rate,
        bytesize=int(settings.data_bits),
        parity=settings.parity.value,
        stopbits=int(settings.stop_bits),
        timeout=READ_TIMEOUT,
    )


def decode_lossy(data: bytes) -> str:
    """Decode UTF-8, replacing invalid sequences with U+FFFD."""
    return bytes(data).decode("utf-8", errors="replace")


def send_bytes(port, data: bytes) -> None:
    port.write(data)


def send_file(port, path) -> int:
    """Send a whole file to the port and return the number of bytes sent."""
    data = Path(path).read_bytes()
    send_bytes(port, data)
    return len(data)


class SerialReader:
    """Reads a port on a background thread and hands text to callbacks."""

    def __init__(
        self,
        port,
        on_data: Callable[[str], None],
        on_error: Callable[[str], None],
    ) -> None:
        self._port = port
        self._on_data = on_data
        self._on_error = on_error
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="comterm-reader", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop reading; waits for the reader thread to finish."""
        self._stop.set()
        cancel = getattr(self._port, "cancel_read", None)
        if cancel is not None:
            try:
                cancel()
            except (OSError, AttributeError):
                pass
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=READ_TIMEOUT * 2)

    def _read_chunk(self) -> bytes:
        first = self._port.read(1)
        if not first:
            return b""
        waiting = min(self._port.in_waiting, READ_CHUNK - len(first))
        return first + self._port.read(waiting) if waiting > 0 else first

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                chunk = self._read_chunk()
            except OSError as exc:
                if not self._stop.is_set():
                    self._on_error(str(exc))
                return
            if chunk and not self._stop.is_set():
                self._on_data(decode_lossy(chunk))