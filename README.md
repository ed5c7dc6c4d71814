# tonic

Small building blocks for HTTP applications. The package uses only the
standard library.

## Modules

- `tonic.path`
  - `clean_path` makes a URL path canonical.
  - It collapses repeated slashes and drops `.` elements.
  - Each `..` removes the element before it, but never climbs above the root.
  - The result always starts with `/` and keeps a trailing slash.
- `tonic.bytesconv`
  - `string_to_bytes` and `bytes_to_string` convert between text and UTF-8 bytes.
  - Bytes that are not valid UTF-8 survive a round trip.
- `tonic.jsonutil`
  - `marshal` produces compact JSON bytes with sorted keys.
  - Non-ASCII text is written as is, and U+2028/U+2029 are escaped.
  - `<`, `>` and `&` are escaped unless you pass `escape_html=False`.
  - Bytes values are encoded as base64.
  - `marshal_indent` produces indented output, and `unmarshal` decodes.
  - Failures raise `MarshalError`, a subclass of `ValueError`.
- `tonic.logger` formats access-log lines.
  - `LogFormatterParams` holds the facts about one request. It also picks the
    ANSI colours for the status code and the method.
  - `default_log_formatter` turns those facts into one line.
  - `format_duration` writes durations such as `1.5ms` or `2h3m4s`.
  - `LoggerConfig` holds a formatter, an output stream and the paths to skip.
  - Colours follow `ColorMode`: `AUTO` colours only on a terminal, while
    `FORCE` and `DISABLE` override that. Set the mode with
    `force_console_color`, `disable_console_color` or
    `set_console_color_mode`, and read it with `console_color_mode`.
- `tonic.proxies`
  - `TrustedProxies` holds the proxy networks whose forwarding headers are
    believed. By default it trusts every address.
  - `validate_header` picks the client address out of an
    `X-Forwarded-For` style header.
  - `parse_ip` and `prepare_trusted_cidrs` are the parsing helpers behind it.
- `tonic.handlers`
  - `HandlersChain` is a list of handlers whose `last()` is the main one.
  - `RouteInfo` describes a registered route.
  - `trailing_slash_redirect_path` and `sanitize_prefix` build redirect targets.
  - `redirect_status` gives 301 for GET and 307 otherwise.
  - `resolve_address` chooses a listen address from its argument, the `PORT`
    environment variable, or `:8080`.

## Examples

```python
from tonic.path import clean_path

clean_path("/abc/def/../ghi")   # "/abc/ghi"
clean_path("abc//./../def")     # "/def"
clean_path("")                  # "/"
```

```python
from tonic.jsonutil import marshal

marshal({"b": 1, "a": "<"})                     # b'{"a":"\\u003c","b":1}'
marshal({"a": "<"}, escape_html=False)          # b'{"a":"<"}'
```

```python
from tonic.proxies import TrustedProxies

proxies = TrustedProxies()
proxies.is_unsafe()                         # True: everything is trusted
proxies.set_trusted_proxies(["10.0.0.0/8", "192.168.1.33"])
proxies.is_unsafe()                         # False
proxies.validate_header("203.0.113.5, 10.0.0.1")   # "203.0.113.5"
```

A bare address is trusted as a single host. An entry that is neither an
address nor a network raises `ValueError`. Passing `None` turns trust off
entirely.

```python
from datetime import timedelta
from tonic.logger import format_duration

format_duration(5)                                           # "5s"
format_duration(0.0015)                                      # "1.5ms"
format_duration(timedelta(hours=2, minutes=3, seconds=4))    # "2h3m4s"
```

```python
from tonic.handlers import trailing_slash_redirect_path, redirect_status

trailing_slash_redirect_path("/foo")    # "/foo/"
trailing_slash_redirect_path("/foo/")   # "/foo"
redirect_status("POST")                 # 307
```

## What it does not do

The package has no router, no server and no request or response objects.
There is no middleware that writes log lines, and no response renderers.
There is no running-mode switch and no recovery of failed requests.

It supplies the pieces such code needs:

- path cleaning
- JSON encoding
- log formatting
- client address resolution
- redirect helpers

Wiring them into a WSGI or other application is left to you.