# selecthttpd

A small, single-threaded HTTP/1.1 file server that multiplexes its
connections with `select()`. It serves files from a web root and handles
`OPTIONS`, `GET`, `HEAD`, `POST`, `PUT`, `DELETE` and `TRACE`. The package
also includes a small interactive client for a simple time protocol.

No third-party libraries are needed.

## Installation

```
pip install .
```

## Running the server

```
selecthttpd
```

The server listens on all interfaces (`0.0.0.0`) on port 27015 and serves
files from `./wwwroot`. You can change these defaults with three options:

```
selecthttpd --host 127.0.0.1 --port 8080 --webroot ./site
```

The server runs until you interrupt it with Ctrl-C. If it cannot bind to
the address, it prints an error and exits with status 1.

### How requests are answered

The server reads a request until it has the full header block. If the
headers carry a `Content-Length`, it also waits for that many body bytes.
It then builds the response as follows:

- `GET /path` returns the file at web root + path. A request for `/` is
  served as `/index.html`. With a `?lang=xx` query, the server tries
  `name.xx.html` in place of `name.ext` and uses it when it can be read.
  A missing file gets `404 Not Found`.
- `HEAD` answers with the same status as `GET`, but with
  `Content-Length: 0` and no body.
- `PUT` writes the request body to the file. It answers `201 Created` with a
  `Location` header when the file is new, and `200 OK` when the file already
  existed. If the file cannot be written, it answers
  `500 Internal Server Error`.
- `DELETE` removes the file and answers `204 No Content`. It answers
  `404 Not Found` if there is no such file, and `500 Internal Server Error`
  if the file cannot be removed.
- `POST` prints `POST body: [...]` to standard output and answers `200 OK`.
- `TRACE` echoes the whole request back with `Content-Type: message/http`.
- `OPTIONS` answers `200 OK` and lists the supported methods in an `Allow`
  header.
- A path that contains `..` gets `400 Bad Request`. Any other method gets
  `501 Not Implemented`.

Each connection serves one request, and the server closes it once the
whole response has been sent. A connection with no activity for more than
120 seconds is closed.

## Using it from Python

```python
from selecthttpd.server import Server

with Server(host="127.0.0.1", port=8080, webroot="./wwwroot") as server:
    print(server.address)
    server.run()
```

- `Server.poll(timeout)` runs one round of the event loop. It waits up to
  `timeout` seconds, or forever when `timeout` is `None`. Use it when the
  server has to share a loop with other work.
- `Server.connections` holds the connections that are open.
- `Server.close()` closes all connections and the listening socket. Leaving
  the `with` block does the same.

`selecthttpd.connection.build_response(request, webroot)` turns the bytes of
a complete request into the bytes of the response, with no sockets
involved. `selecthttpd.connection.Connection` wraps one client socket:

- `recv_chunk()` reads from the socket.
- `send_chunk()` writes to the socket and raises `ResponseSent` once the
  whole response has gone out.
- `ConnectionClosed` is raised when the peer goes away.

`selecthttpd.common` provides the shared helpers:

- `request_complete(buf)`
- `to_method(token)`
- `http_date(when)`
- `load_file(path)`
- the `HttpMethod`, `RecvState` and `SendState` enumerations

## The time client

```
selecthttpd-client --host 127.0.0.1 --port 27015
```

These values are the defaults. The client connects and shows a menu:

- `1` sends `TimeString` and prints the reply.
- `2` sends `SecondsSince1970` and prints the reply.
- `3` sends `Exit` and closes the connection.

The client ignores any other input and shows the menu again. At end of
input it closes the connection. If a connection or socket error occurs, it
prints the error and exits with status 1.

## What the package does not do

The package has no server for the time protocol. Nothing in it answers
`TimeString` or `SecondsSince1970`, so `selecthttpd-client` needs some
other server that speaks that protocol. The HTTP server does not speak it:
these bare commands never form a complete HTTP request, so the client
would wait for a reply that does not come.

The HTTP server does not do keep-alive, chunked transfer encoding, content
types for served files, or TLS.

## Running the tests

```
pip install .[test]
pytest
```