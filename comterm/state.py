"""Terminal state and the transitions the user interface drives."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

BAUD_RATES: tuple[int, ...] = (
    110, 300, 600, 1200, 2400, 4800, 9600, 14400, 19200, 38400, 57600, 115200, 128000, 256000,
)
DEFAULT_BAUD_RATE = 115200
DEFAULT_LOG_FILE = "com_log.txt"
FILE_SENT_MESSAGE = "Отправка файла завершена."
PORT_NOT_OPEN = "Ошибка: Порт не открыт."


class DataBits(enum.IntEnum):
    """Number of data bits in a character."""

    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8


class StopBits(enum.IntEnum):
    """Number of stop bits."""

    ONE = 1
    TWO = 2


class Parity(str, enum.Enum):
    """Parity checking mode."""

    NONE = "N"
    ODD = "O"
    EVEN = "E"


@dataclass(frozen=True)
class PortSettings:
    """Everything needed to open a serial port."""

    port: str
    baud_rate: int
    data_bits: DataBits = DataBits.EIGHT
    stop_bits: StopBits = StopBits.ONE
    parity: Parity = Parity.NONE


@dataclass
class Terminal:
    """The terminal's log, connection and form state."""

    log: list[str] = field(default_factory=lambda: ["Ожидание подключения..."])
    port: Any = None
    show_received_prefix: bool = True
    available_ports: list[str] = field(default_factory=list)
    selected_port: str | None = None
    baud_rates: tuple[int, ...] = BAUD_RATES
    selected_baud_rate: int | None = DEFAULT_BAUD_RATE
    data_bits: DataBits = DataBits.EIGHT
    stop_bits: StopBits = StopBits.ONE
    parity: Parity = Parity.NONE
    input_text: str = ""
    file_path: str = ""

    @property
    def is_connected(self) -> bool:
        return self.port is not None

    def ports_found(self, ports) -> None:
        """Take a fresh port list; the selection resets only when the list changed."""
        ports = list(ports)
        if ports != self.available_ports:
            self.available_ports = ports
            self.selected_port = ports[0] if ports else None

    def ports_failed(self, error) -> None:
        self.log.append(f"Ошибка при поиске портов: {error}")

    def connect_request(self) -> PortSettings | None:
        """Return the settings to open with, or None when no port or rate is chosen."""
        if self.selected_port is None or self.selected_baud_rate is None:
            return None
        self.log.append(f"Попытка подключения к {self.selected_port}...")
        return PortSettings(
            port=self.selected_port,
            baud_rate=self.selected_baud_rate,
            data_bits=self.data_bits,
            stop_bits=self.stop_bits,
            parity=self.parity,
        )

    def connected(self, port) -> None:
        self.port = port
        self.log.append("Соединение успешно установлено.")

    def connect_failed(self, error) -> None:
        self.log.append(f"Ошибка подключения: {error}")
        self.port = None

    def disconnect(self) -> None:
        self.port = None
        self.log.append("Соединение закрыто.")

    def clear_log(self) -> None:
        self.log = ["Лог очищен."]

    def save_log(self, path=DEFAULT_LOG_FILE) -> None:
        """Write the log to a file and record the outcome in the log."""
        try:
            Path(path).write_text("\n".join(self.log), encoding="utf-8")
        except OSError as exc:
            self.log.append(f"Ошибка сохранения: {exc}")
        else:
            self.log.append(f"Лог сохранён в {path}")

    def submit_input(self) -> str | None:
        """Take the typed text for sending, or None when no port is open."""
        if not self.is_connected:
            self.log.append(PORT_NOT_OPEN)
            return None
        text = self.input_text
        self.log.append(f"< {text}")
        self.input_text = ""
        return text

    def begin_file_send(self) -> str | None:
        """Take the file path for sending, or None when no port is open."""
        if not self.is_connected:
            self.log.append(PORT_NOT_OPEN)
            return None
        self.log.append(f"< Отправка данных из файла: {self.file_path}")
        return self.file_path

    def data_received(self, data) -> None:
        self.log.append(f"> {data}" if self.show_received_prefix else data)

    def serial_error(self, error) -> None:
        self.log.append(f"Ошибка COM-порта: {error}")
        self.port = None