# microws

Pure-Python building blocks for a small HTTP/1.1 and WebSocket server.
It has no dependencies outside the standard library.

## What is inside

| Module | Purpose |
| --- | --- |
| `microws.backpressure` | `BackPressure`, a write buffer that removes sent bytes lazily, compacting once the erased part exceeds 1/32 of the buffer. |
| `microws.http_errors` | `HttpError` and `error_response()`, the canned replies for parser errors (505, 431, 400), with or without an HTML body. |
| `microws.topic_tree` | `TopicTree`, `Topic`, `Subscriber`, `IteratorFlags`, `TopicTreeMessage`, `TopicTreeBigMessage`: pub/sub that queues published messages per subscriber until they are drained. |
| `microws.websocket_context_data` | `WebSocketContextData`: per-route WebSocket settings and handlers, and the split of an idle timeout into an idle part and a ping-timeout margin. |
| `microws.caching` | `ResponseCache` and `CachingResponse`: keep whole response bodies by key for a number of seconds. |
| `microws.file_server` | `FileStore` and `load_file_content()`: load a folder into memory, gzip files that get smaller, and build `(status, headers, body)` answers. |
| `microws.middleware` | `has_ext()` and `content_type_headers()` for filling in `Content-Type`. |
| `microws.opt_parser` | `OptParser`, `LongOption`, `ArgType`, `OptionError`: a getopt-style parser with GNU long options and argument permutation. |

## Installing

Install it like any other package from a checkout with your usual Python
packaging tool. The `test` extra pulls in pytest.

## Examples

Backpressure keeps what could not be written yet:

```python
from microws.backpressure import BackPressure

bp = BackPressure()
bp.append(b"hello world")
bp.erase(6)
assert len(bp) == 5
assert bp.data() == b"world"
```

Canned error replies:

```python
from microws.http_errors import HttpError, error_response

reply = error_response(HttpError.BAD_REQUEST, anonymized=True)
assert reply == b"HTTP/1.1 400 Bad Request\r\nConnection: close\r\n\r\n"
```

Pub/sub with a topic tree: publishing only queues the message; the callback
given to the tree is called when a subscriber is drained. The sender itself
never receives its own message.

```python
from microws.topic_tree import TopicTree

received = []

def deliver(subscriber, message, flags):
    received.append(message)
    return False  # True would stop this subscriber's drain early

tree = TopicTree(deliver)
alice = tree.create_subscriber()
bob = tree.create_subscriber()
tree.subscribe(bob, "news")

assert tree.publish(alice, "news", "hello")
assert bob.needs_drainage()
tree.drain_all()
assert received == ["hello"]
```

Caching response bodies; the handler runs only when there is no fresh entry:

```python
from microws.caching import ResponseCache

cache = ResponseCache(seconds_to_expiry=10)

def handler(res, request):
    res.write("Hello ")
    res.end("world")

cache.serve("/hello", response, request, handler)   # runs handler
cache.serve("/hello", response, request, handler)   # served from cache
```

Here `response` is any object with an `end(data)` method.

Serving a folder from memory:

```python
from microws.file_server import FileStore

store = FileStore("public")
status, headers, body = store.respond("/")   # answers with /index.html
```

Option parsing in the getopt style:

```python
from microws.opt_parser import OptParser

parser = OptParser(["prog", "-v", "-o", "out.txt", "input"])
assert parser.parse("vo:") == "v"
assert parser.parse("vo:") == "o" and parser.optarg == "out.txt"
assert parser.parse("vo:") is None
assert parser.arg() == "input"
```

Unknown options and missing arguments raise `OptionError`; parsing can go on
afterwards.

## What it does not do

The package holds no event loop, no sockets and no HTTP response writer, so
it does not listen on a port or serve requests by itself. `FileStore` and
`ResponseCache` produce or hand over response data; connecting them to a
network server is left to the caller. There is no command-line program.

## Running the tests

The tests live in `tests/` and use pytest.