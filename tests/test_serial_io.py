import threading
import time
from types import SimpleNamespace
from unittest import mock

import pytest

from comterm.serial_io import (
    SerialReader,
    decode_lossy,
    find_ports,
    open_port,
    send_bytes,
    send_file,
)
from comterm.state import PortSettings


class FakePort:
    def __init__(self, data=b"", error=None):
        self.buffer = bytearray(data)
        self.error = error
        self.written = bytearray()
        self.closed = False

    @property
    def in_waiting(self):
        return len(self.buffer)

    def read(self, size=1):
        if self.buffer:
            chunk = bytes(self.buffer[:size])
            del self.buffer[:size]
            return chunk
        if self.error is not None:
            raise self.error
        time.sleep(0.01)
        return b""

    def write(self, data):
        self.written.extend(data)
        return len(data)

    def close(self):
        self.closed = True


def test_decode_lossy_valid_and_invalid():
    assert decode_lossy("привет".encode()) == "привет"
    assert decode_lossy(b"a\xffb") == "a\ufffdb"


def test_send_bytes_writes_everything():
    port = FakePort()
    send_bytes(port, b"AT\r\n")
    assert bytes(port.written) == b"AT\r\n"


def test_send_file_round_trip(tmp_path):
    payload = bytes(range(256))
    target = tmp_path / "payload.bin"
    target.write_bytes(payload)
    port = FakePort()
    assert send_file(port, target) == len(payload)
    assert bytes(port.written) == payload


def test_send_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        send_file(FakePort(), tmp_path / "missing.bin")


def test_find_ports_lists_device_names():
    infos = [SimpleNamespace(device="COM3"), SimpleNamespace(device="/dev/ttyUSB0")]
    with mock.patch("serial.tools.list_ports.comports", return_value=infos):
        assert find_ports() == ["COM3", "/dev/ttyUSB0"]


def test_open_port_loopback_round_trip():
    port = open_port(PortSettings("loop://", 9600))
    try:
        port.write(b"ping")
        assert port.read(4) == b"ping"
        assert port.baudrate == 9600
    finally:
        port.close()


def test_open_port_missing_device():
    with pytest.raises(OSError):
        open_port(PortSettings("/nonexistent/comterm-port", 9600))


def test_reader_delivers_data_then_error():
    port = FakePort(b"hello", error=OSError("device gone"))
    received = []
    errors = []
    done = threading.Event()

    def on_error(message):
        errors.append(message)
        done.set()

    reader = SerialReader(port, received.append, on_error)
    reader.start()
    assert done.wait(2)
    reader.stop()
    assert "".join(received) == "hello"
    assert errors == ["device gone"]
    assert reader.running is False


def test_reader_stop_without_data():
    reader = SerialReader(FakePort(), lambda text: None, lambda message: None)
    reader.start()
    assert reader.running is True
    reader.stop()
    assert reader.running is False