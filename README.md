# opwire

A minimal TCP client and server that speak a small binary protocol.
The client reads its settings from a config file, logs console input,
sends one text message and then a package of lines. The server accepts
a single client, logs every message and package it receives, and stops
when that client disconnects.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
opwire-server [--port PORT] [--log FILE]
```

The server listens on all IPv4 interfaces on port `4444` by default and
writes its log to `log.log` (or `--log FILE`) while echoing it to the
terminal. It accepts one client and then, for each frame:

- a message: logs `Received message <text>`;
- a package: logs `Received the following values:` and then each value;
- any other operation code: logs a warning `Unknown operation`.

When the client closes the connection the server logs
`The client disconnected. Shutting down server` and exits with status 1.

## Running the client

Start the server first. The client reads a configuration file,
`./cliente.config` by default, made of `KEY=VALUE` lines (blank lines
and lines starting with `#` are ignored). It needs three keys:

```
IP=127.0.0.1
PUERTO=4444
CLAVE=hello
```

```
opwire-client [--config FILE] [--log FILE]
```

The client logs to `./cliente.log` (or `--log FILE`) and the terminal.
It then:

1. Logs the values of `PUERTO`, `IP` and `CLAVE`.
2. Prompts with `> ` and logs each line you type, until an empty line
   or end of input.
3. Connects to `IP`:`PUERTO` and sends the value of `CLAVE` as a message.
4. Prompts again, collecting each line into a package, until an empty
   line or end of input, and sends the package.

A missing key in the configuration file raises `KeyError`.

## Wire format

Every frame is made of little-endian signed 32-bit integers and raw bytes:

| Field     | Size       | Meaning                               |
|-----------|------------|---------------------------------------|
| op code   | 4 bytes    | `0` for a message, `1` for a package  |
| size      | 4 bytes    | length of the payload that follows    |
| payload   | size bytes | message text or package entries       |

A message payload is the UTF-8 text followed by a NUL byte. A package
payload is a sequence of entries, each a 4-byte length followed by that
many bytes; lines added by the client carry their NUL terminator. When
read back, each entry is cut at its first NUL byte and decoded as UTF-8.

## Library use

The framing lives in `opwire.protocol`:

```python
from opwire.protocol import OpCode, Package, encode_message, decode_values

frame = encode_message("hello")          # MESSAGE frame

package = Package()                      # op_code defaults to OpCode.PACKAGE
package.add(b"first\0")
package.add(b"second\0")
data = package.serialize()               # op code + size + payload

decode_values(bytes(package.buffer))     # ['first', 'second']
```

`decode_values` raises `ValueError` on a truncated or overrunning
payload. `receive_operation(sock)` reads the next operation code, closing
the socket and raising `ConnectionClosed` (a `ConnectionError`) if the
peer has gone; `receive_buffer(sock)` reads one size-prefixed payload.

`opwire.client` offers `load_config`, `setup_logger`, `read_lines`,
`read_console`, `build_package`, `create_connection`, `send_message` and
`send_package`. `opwire.server` offers `start_server`, `wait_client`,
`receive_message`, `receive_package` and `serve(sock, logger)`, which
handles frames until the client disconnects and returns `1`.

## Limitations

The server handles exactly one client per run and exits once it
disconnects; it does not serve clients concurrently or keep running.
There is no authentication or encryption: `CLAVE` is sent as plain text.