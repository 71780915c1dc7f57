"""Graphical serial terminal window."""

from __future__ import annotations

import argparse
import tkinter as tk
from tkinter import ttk

from .controller import Controller
from .state import DataBits, Parity, StopBits

POLL_INTERVAL_MS = 50
SCAN_INTERVAL_MS = 5000
BACKGROUND = "#202225"
FOREGROUND = "#e0e0e0"


def log_text(lines) -> str:
    """Render log lines as the text shown in the log pane."""
    return "\n".join(lines)


class TerminalWindow:
    """Main window: port controls, settings, log, input and file sending."""

    def __init__(self, root: tk.Tk, controller: Controller | None = None) -> None:
        self.root = root
        self.controller = controller if controller is not None else Controller()
        self.state = self.controller.state
        self._rendered_log: list[str] | None = None
        self._rendered_ports: list[str] | None = None
        root.title("COM Terminal")
        root.configure(background=BACKGROUND)
        self._build()
        self.controller.scan_ports()
        self._refresh()
        root.after(POLL_INTERVAL_MS, self._tick)
        root.after(SCAN_INTERVAL_MS, self._scan)
        root.protocol("WM_DELETE_WINDOW", self.close)

    def _build(self) -> None:
        state = self.state
        content = ttk.Frame(self.root, padding=10)
        content.pack(fill=tk.BOTH, expand=True)

        controls = ttk.Frame(content)
        controls.pack(pady=5)
        self.port_var = tk.StringVar()
        self.port_box = ttk.Combobox(controls, textvariable=self.port_var, state="readonly")
        self.port_box.bind("<<ComboboxSelected>>", self._port_selected)
        self.port_box.pack(side=tk.LEFT, padx=5)
        self.baud_var = tk.StringVar(value=str(state.selected_baud_rate or ""))
        baud_box = ttk.Combobox(
            controls,
            textvariable=self.baud_var,
            state="readonly",
            values=[str(rate) for rate in state.baud_rates],
        )
        baud_box.bind("<<ComboboxSelected>>", self._baud_selected)
        baud_box.pack(side=tk.LEFT, padx=5)
        self.connect_button = ttk.Button(controls, command=self._toggle_connection)
        self.connect_button.pack(side=tk.LEFT, padx=5)

        settings = ttk.Frame(content)
        settings.pack(pady=5)
        ttk.Label(settings, text="Биты данных:").pack(side=tk.LEFT, padx=5)
        self.data_bits_var = tk.IntVar(value=int(state.data_bits))
        for bits in DataBits:
            ttk.Radiobutton(
                settings, text=str(int(bits)), value=int(bits), variable=self.data_bits_var,
                command=self._settings_changed,
            ).pack(side=tk.LEFT)
        ttk.Label(settings, text="Стоп-биты:").pack(side=tk.LEFT, padx=5)
        self.stop_bits_var = tk.IntVar(value=int(state.stop_bits))
        for bits in StopBits:
            ttk.Radiobutton(
                settings, text=str(int(bits)), value=int(bits), variable=self.stop_bits_var,
                command=self._settings_changed,
            ).pack(side=tk.LEFT)
        ttk.Label(settings, text="Четность:").pack(side=tk.LEFT, padx=5)
        self.parity_var = tk.StringVar(value=state.parity.value)
        for parity, label in ((Parity.NONE, "Нет"), (Parity.ODD, "Нечет."), (Parity.EVEN, "Четн.")):
            ttk.Radiobutton(
                settings, text=label, value=parity.value, variable=self.parity_var,
                command=self._settings_changed,
            ).pack(side=tk.LEFT)

        log_frame = ttk.Frame(content)
        log_frame.pack(fill=tk.BOTH, expand=True, pady=5)
        self.log_view = tk.Text(
            log_frame, height=20, state=tk.DISABLED, wrap=tk.WORD,
            background=BACKGROUND, foreground=FOREGROUND,
        )
        scrollbar = ttk.Scrollbar(log_frame, command=self.log_view.yview)
        self.log_view.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self.log_view.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        log_buttons = ttk.Frame(content)
        log_buttons.pack(pady=5)
        ttk.Button(log_buttons, text="Сохранить", command=self._save_log).pack(side=tk.LEFT, padx=5)
        ttk.Button(log_buttons, text="Очистить", command=self._clear_log).pack(side=tk.LEFT, padx=5)
        self.prefix_var = tk.BooleanVar(value=state.show_received_prefix)
        ttk.Checkbutton(
            log_buttons, text="Показывать префикс", variable=self.prefix_var,
            command=self._prefix_toggled,
        ).pack(side=tk.LEFT, padx=5)

        input_row = ttk.Frame(content)
        input_row.pack(fill=tk.X, pady=5)
        self.input_var = tk.StringVar(value=state.input_text)
        entry = ttk.Entry(input_row, textvariable=self.input_var)
        entry.bind("<Return>", lambda _event: self._send_input())
        entry.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=5)
        ttk.Button(input_row, text="Отправить", command=self._send_input).pack(side=tk.LEFT, padx=5)

        file_row = ttk.Frame(content)
        file_row.pack(fill=tk.X, pady=5)
        ttk.Button(file_row, text="Открыть файл", command=self._send_file).pack(side=tk.LEFT, padx=5)
        self.file_var = tk.StringVar(value=state.file_path)
        ttk.Entry(file_row, textvariable=self.file_var).pack(side=tk.LEFT, fill=tk.X, expand=True, padx=5)
        ttk.Button(file_row, text="Отправить файл", command=self._send_file).pack(side=tk.LEFT, padx=5)

    def _port_selected(self, _event=None) -> None:
        self.state.selected_port = self.port_var.get() or None

    def _baud_selected(self, _event=None) -> None:
        self.state.selected_baud_rate = int(self.baud_var.get())

    def _settings_changed(self) -> None:
        self.state.data_bits = DataBits(self.data_bits_var.get())
        self.state.stop_bits = StopBits(self.stop_bits_var.get())
        self.state.parity = Parity(self.parity_var.get())

    def _prefix_toggled(self) -> None:
        self.state.show_received_prefix = bool(self.prefix_var.get())

    def _toggle_connection(self) -> None:
        if self.state.is_connected:
            self.controller.disconnect()
        else:
            self.controller.connect()
        self._refresh()

    def _save_log(self) -> None:
        self.state.save_log()
        self._refresh()

    def _clear_log(self) -> None:
        self.state.clear_log()
        self._refresh()

    def _send_input(self) -> None:
        self.state.input_text = self.input_var.get()
        self.controller.send_input()
        self.input_var.set(self.state.input_text)
        self._refresh()

    def _send_file(self) -> None:
        self.state.file_path = self.file_var.get()
        self.controller.send_file()
        self._refresh()

    def _tick(self) -> None:
        self.controller.poll()
        self._refresh()
        self.root.after(POLL_INTERVAL_MS, self._tick)

    def _scan(self) -> None:
        self.controller.scan_ports()
        self._refresh()
        self.root.after(SCAN_INTERVAL_MS, self._scan)

    def _refresh(self) -> None:
        state = self.state
        if state.available_ports != self._rendered_ports:
            self._rendered_ports = list(state.available_ports)
            self.port_box["values"] = self._rendered_ports
            self.port_var.set(state.selected_port or "")
        self.connect_button.configure(text="Закрыть" if state.is_connected else "Открыть")
        if state.log != self._rendered_log:
            self._rendered_log = list(state.log)
            self.log_view.configure(state=tk.NORMAL)
            self.log_view.delete("1.0", tk.END)
            self.log_view.insert(tk.END, log_text(state.log))
            self.log_view.configure(state=tk.DISABLED)
            self.log_view.see(tk.END)

    def close(self) -> None:
        self.controller.close()
        self.root.destroy()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="comterm", description="Serial port terminal.")
    parser.parse_args(argv)
    root = tk.Tk()
    TerminalWindow(root)
    root.mainloop()
    return 0