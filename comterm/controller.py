"""Connects the terminal state to real serial ports and background work."""

from __future__ import annotations

import queue
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from . import serial_io
from .state import FILE_SENT_MESSAGE, Terminal

Event = Callable[[Terminal], None]


class Controller:
    """Runs port actions; results from other threads are applied by poll()."""

    def __init__(
        self,
        state: Terminal | None = None,
        *,
        opener=serial_io.open_port,
        scanner=serial_io.find_ports,
    ) -> None:
        self.state = state if state is not None else Terminal()
        self._opener = opener
        self._scanner = scanner
        self._events: queue.SimpleQueue[Event] = queue.SimpleQueue()
        self._reader: serial_io.SerialReader | None = None
        self._port = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="comterm-send")

    def scan_ports(self) -> None:
        try:
            ports = list(self._scanner())
        except OSError as exc:
            self.state.ports_failed(str(exc))
        else:
            self.state.ports_found(ports)

    def connect(self) -> None:
        settings = self.state.connect_request()
        if settings is None:
            return
        self._release()
        try:
            port = self._opener(settings)
        except OSError as exc:
            self.state.connect_failed(str(exc))
            return
        self._port = port
        self._reader = serial_io.SerialReader(port, self._post_data, self._post_error)
        self.state.connected(port)
        self._reader.start()

    def disconnect(self) -> None:
        self._release()
        self.state.disconnect()

    def send_input(self) -> Future | None:
        """Queue the typed text for sending; returns the pending job or None."""
        text = self.state.submit_input()
        if text is None:
            return None
        return self._executor.submit(self._write, self._port, text.encode("utf-8"))

    def send_file(self) -> Future | None:
        """Queue the chosen file for sending; returns the pending job or None."""
        path = self.state.begin_file_send()
        if path is None:
            return None
        return self._executor.submit(self._write_file, self._port, path)

    def poll(self) -> int:
        """Apply pending results to the state and return how many there were."""
        applied = 0
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                break
            event(self.state)
            applied += 1
        if self.state.port is None and self._port is not None:
            self._release()
        return applied

    def close(self) -> None:
        self._release()
        self._executor.shutdown(wait=True)

    def _post_data(self, text: str) -> None:
        self._events.put(lambda state: state.data_received(text))

    def _post_error(self, message: str) -> None:
        self._events.put(lambda state: state.serial_error(message))

    def _write(self, port, data: bytes) -> None:
        try:
            serial_io.send_bytes(port, data)
        except OSError as exc:
            self._post_error(str(exc))

    def _write_file(self, port, path) -> None:
        try:
            serial_io.send_file(port, path)
        except OSError as exc:
            self._post_error(f"Ошибка отправки файла: {exc}")
        else:
            self._post_data(FILE_SENT_MESSAGE)

    def _release(self) -> None:
        reader, self._reader = self._reader, None
        port, self._port = self._port, None
        if reader is not None:
            reader.stop()
        if port is not None:
            try:
                port.close()
            except OSError:
                pass