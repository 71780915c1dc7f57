# comterm

A small desktop terminal for serial (COM) ports. You choose a port and a baud
rate, open the connection, and then type commands or send a whole file to the
device. Whatever the device sends back appears in the log window. The window's
labels and log messages are in Russian.

## Installing

```
pip install .
```

The window is built with tkinter, so the Python installation must include Tk.

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

```
comterm
```

This opens the terminal window. The command takes no options besides `--help`.
The window's controls are:

- **Port list**: the serial ports found on the machine. The list is checked
  again every five seconds, and when it changes the first port is chosen.
- **Baud rate**: 110 up to 256000 baud, 115200 by default.
- **Data bits** (5, 6, 7 or 8), **stop bits** (1 or 2) and **parity**
  (none, odd or even). The defaults are 8, 1 and none.
- **Открыть / Закрыть**: opens or closes the chosen port. Reads time out
  after one second. A time-out is not treated as an error.
- **Command field and Отправить** (or Enter): sends the typed text to the port
  as UTF-8, exactly as typed, with no line ending added. Each sent line is
  logged with a `< ` prefix and the field is cleared.
- **File path, Открыть файл and Отправить файл**: both buttons send the raw
  bytes of the file named in the path field. When the whole file has been
  written, "Отправка файла завершена." is logged like received data.
- **Показывать префикс**: when checked (the default), received data is logged
  with a `> ` prefix.
- **Сохранить**: writes the log, one entry per line, to `com_log.txt` in the
  current directory.
- **Очистить**: clears the log.

Received bytes are decoded as UTF-8. Invalid sequences become the replacement
character. Any serial error other than a time-out, including a failed write or
a file that cannot be read, is reported in the log and closes the connection.

## Using it from Python

`comterm.state.Terminal` holds the terminal's log, connection and form state
and does no serial I/O. Its methods (`ports_found`, `connect_request`,
`connected`, `submit_input`, `begin_file_send`, `data_received`,
`serial_error`, `save_log` and others) are the transitions the window drives,
so the state can back other front ends or be tested on its own.
`connect_request` returns a `PortSettings` built from the chosen port, baud
rate, `DataBits`, `StopBits` and `Parity`.

`comterm.controller.Controller` joins that state to a real port. Its
`scan_ports`, `connect`, `disconnect`, `send_input` and `send_file` act
straight away; data read in the background and results of sends are applied
to the state when you call `poll()`. `close()` releases the port and stops the
worker thread. The port opener and the port scanner can be passed in, which
lets the controller run against fakes.

`comterm.serial_io` has the helpers underneath: `find_ports`, `open_port`
(which also accepts pyserial URLs such as `loop://`), `decode_lossy`,
`send_bytes`, `send_file` and the background `SerialReader`.

## What it does not do

- There is no file picker: "Открыть файл" sends the file whose path is typed
  in the field, just as "Отправить файл" does.
- Sent text gets no line ending, and there is no hex view or hex input.
- The log lives in memory and is only written to disk when you save it, always
  to `com_log.txt`.