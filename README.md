# httpserve

Building blocks for an HTTP server in Python: URL endpoint matching, IP
address rules for ban and allow lists, request and response objects, and
resources that answer requests one HTTP method at a time. It has no
dependencies outside the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## What it does not do

The package holds no server. It does not open sockets, listen for
connections, parse HTTP from the wire, route requests to resources or
apply ban and allow lists by itself. It gives you the pieces such a
server is made of; wiring them to a network layer is up to you.

## Endpoints

`httpserve.endpoint.HttpEndpoint(url, family, registration, use_regex)`
splits a URL into pieces and, with `use_regex`, compiles it into a
case-insensitive regular expression. At registration, pieces such as
`{id}` declare parameters (matching `([^\/]+)`), `{id|([0-9]+)}` gives a
parameter its own pattern, and other pieces may be plain regular
expressions. Asking for a regex outside registration, a malformed `{}`
piece or an invalid regex raises `ValueError`.

```python
from httpserve.endpoint import HttpEndpoint

route = HttpEndpoint("/users/{id|([0-9]+)}", False, True, True)
route.match(HttpEndpoint("/users/42"))     # True
route.match(HttpEndpoint("/users/bob"))    # False
route.url_pars                             # ('id',)

family = HttpEndpoint("/static", True, True, True)
family.match(HttpEndpoint("/static/css/site.css"))  # True
```

Endpoints expose `url_complete`, `url_normalized`, `url_pars`,
`url_pieces`, `chunk_positions`, `is_family_url` and `is_regex_compiled`.
They are ordered with `<` (family endpoints first, then by normalized URL
without regard to case), are hashable, and can be kept in sorted
containers. `match` raises `ValueError` on an endpoint with no compiled
regex.

## IP rules

`httpserve.ip.IPRepresentation` parses IPv4 and IPv6 addresses, including
`*` wildcards such as `"192.168.*.*"` or `"2001:db8::*"`, `::` shortening,
and IPv4 nested at the end of an IPv6 address. Badly formed addresses
raise `ValueError`. Wildcard pieces are ignored when two representations
are compared, so a rule and an address compare as equal (neither is less
than the other) when the rule covers the address.

```python
from httpserve.ip import IPRepresentation

rule = IPRepresentation("192.168.*.*")
addr = IPRepresentation("192.168.1.7")
not (rule < addr) and not (addr < rule)   # True: the rule covers the address
```

For socket address tuples as returned by the `socket` module,
`from_socket_address`, `get_ip_str` and `get_port` take
`(host, port)` for IPv4 or `(host, port, flowinfo, scope_id)` for IPv6.

## Requests

`httpserve.request.HttpRequest` holds the method (upper-cased), path,
version, headers, footers, cookies, query arguments, basic-auth user and
password, and the requestor's address and port.

- `header`, `footer` and `cookie` look names up without regard to case
  and return `""` when absent.
- `arg`, `args` and `args_flat` return query arguments, unescaped with
  `http_unescape` or with the `unescaper` callable given to the request.
  `arg_flat` returns the first value of one argument.
- `querystring()` rebuilds `?k=v&k2=v2` from the raw arguments.
- `get_or_create_file_info` records uploaded files as
  `httpserve.file_info.FileInfo` objects; `remove_uploaded_files()`
  deletes their stored copies, and so does leaving a `with` block on the
  request.
- `str(request)` gives a readable dump of the whole request.

## Responses

`httpserve.responses` has:

- `HttpResponse(response_code=200, content_type=None)` with `headers`,
  `footers` and `cookies` mappings (names compared without regard to
  case), an empty `body()`, `header_items()` that adds one `Set-Cookie`
  line per cookie, and `shoutcast()` to flag an ICY response.
- `StringResponse(content="", response_code=200, content_type="text/plain")`
  whose body is the given text or bytes.
- `FileResponse(filename, response_code=200,
  content_type="application/octet-stream")` whose `body()` reads a regular
  file and raises `OSError` for anything else.
- `DigestAuthFailResponse(content, realm, opaque, reload_nonce, ...)`
  whose `authenticate_header(nonce)` builds the `WWW-Authenticate` value,
  with `stale="true"` when `reload_nonce` is set.

## Resources

`httpserve.resource.HttpResource` is the base class for handlers. Override
`render` to answer every method alike, or `render_get`, `render_post`,
`render_put`, `render_head`, `render_delete`, `render_trace`,
`render_options`, `render_patch` and `render_connect` for one method. By
default they all answer with an empty `200` text response
(`empty_render`). `set_allowing`, `allow_all`, `disallow_all`,
`is_allowed` and `allowed_methods` control which methods are accepted.

```python
from httpserve.resource import HttpResource
from httpserve.responses import StringResponse

class Hello(HttpResource):
    def render_get(self, request):
        return StringResponse("OK", 200, "text/plain")

hello = Hello()
hello.set_allowing("PUT", False)
hello.is_allowed("PUT")   # False
```

## Utilities

`httpserve.http_utils` has `tokenize_url`, `standardize_url`,
`http_unescape` and `base_unescaper` for form unescaping,
`generate_random_upload_filename` (raises `GenerateFilenameError` when no
unique file can be created), `load_file`, and `dump_header_map` and
`dump_arg_map` for debug output. `httpserve.string_utilities` has
`to_upper_copy`, `to_lower_copy` and `string_split`.