import time

import pytest

from comterm.controller import Controller
from comterm.state import PortSettings, Terminal


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


def poll_until(controller, predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        controller.poll()
        if predicate():
            return True
        time.sleep(0.01)
    return False


@pytest.fixture
def port():
    return FakePort()


@pytest.fixture
def controller(port):
    opened = []

    def opener(settings):
        opened.append(settings)
        return port

    ctl = Controller(Terminal(), opener=opener, scanner=lambda: ["COM3"])
    ctl.opened = opened
    yield ctl
    ctl.close()


def test_scan_ports_updates_state(controller):
    controller.scan_ports()
    assert controller.state.available_ports == ["COM3"]
    assert controller.state.selected_port == "COM3"


def test_scan_ports_failure():
    def scanner():
        raise OSError("boom")

    ctl = Controller(scanner=scanner)
    ctl.scan_ports()
    assert ctl.state.log[-1] == "Ошибка при поиске портов: boom"
    ctl.close()


def test_connect_opens_with_state_settings(controller, port):
    controller.scan_ports()
    controller.connect()
    assert controller.opened == [PortSettings("COM3", 115200)]
    assert controller.state.port is port
    assert controller.state.log[-1] == "Соединение успешно установлено."


def test_connect_without_selection_does_nothing(controller):
    controller.connect()
    assert controller.opened == []
    assert controller.state.port is None


def test_connect_failure():
    def opener(settings):
        raise OSError("busy")

    ctl = Controller(opener=opener, scanner=lambda: ["COM3"])
    ctl.scan_ports()
    ctl.connect()
    assert ctl.state.port is None
    assert ctl.state.log[-1] == "Ошибка подключения: busy"
    ctl.close()


def test_received_data_reaches_log(controller, port):
    port.buffer.extend(b"hi")
    controller.scan_ports()
    controller.connect()
    poll_until(controller, lambda: "> hi" in controller.state.log)
    log = controller.state.log
    assert "> hi" in log
    assert log.index("> hi") > log.index("Соединение успешно установлено.")
    assert controller.state.port is port


def test_read_error_drops_connection(controller, port):
    port.error = OSError("unplugged")
    controller.scan_ports()
    controller.connect()
    assert poll_until(controller, lambda: controller.state.port is None)
    assert controller.state.log[-1] == "Ошибка COM-порта: unplugged"
    assert port.closed is True


def test_send_input(controller, port):
    controller.scan_ports()
    controller.connect()
    controller.state.input_text = "AT"
    controller.send_input().result(timeout=2)
    assert bytes(port.written) == b"AT"
    assert controller.state.input_text == ""


def test_send_input_without_port(controller):
    controller.state.input_text = "AT"
    assert controller.send_input() is None
    assert controller.state.log[-1] == "Ошибка: Порт не открыт."


def test_send_file(controller, port, tmp_path):
    target = tmp_path / "data.bin"
    target.write_bytes(b"\x01\x02\x03")
    controller.scan_ports()
    controller.connect()
    controller.state.file_path = str(target)
    controller.send_file().result(timeout=2)
    controller.poll()
    assert bytes(port.written) == b"\x01\x02\x03"
    assert "> Отправка файла завершена." in controller.state.log


def test_send_missing_file_drops_connection(controller, port, tmp_path):
    controller.scan_ports()
    controller.connect()
    controller.state.file_path = str(tmp_path / "missing.bin")
    controller.send_file().result(timeout=2)
    controller.poll()
    assert controller.state.port is None
    assert controller.state.log[-1].startswith("Ошибка COM-порта: Ошибка отправки файла: ")
    assert port.closed is True


def test_disconnect_closes_port(controller, port):
    controller.scan_ports()
    controller.connect()
    controller.disconnect()
    assert port.closed is True
    assert controller.state.port is None
    assert controller.state.log[-1] == "Соединение закрыто."