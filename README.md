# radixweb

Building blocks for a small HTTP framework, with no dependencies beyond the
standard library:

- `radixweb.router`: a radix-tree router with static segments, named
  parameters (`/users/:id`) and match-any wildcards (`/files/*`). Lookups
  prefer static over param over any, and backtrack up the tree when a branch
  dead-ends.
- `radixweb.response`: a `Response` wrapper around a writer that tracks the
  status, the number of bytes written and whether the header was sent, with
  hooks that run before the header is written and after each write.
- `radixweb.middleware.secure`: builds security headers such as
  `X-XSS-Protection`, `X-Frame-Options`, `Strict-Transport-Security`,
  `Content-Security-Policy` and `Referrer-Policy`.
- `radixweb.middleware.slash`: adds or removes a trailing slash, either by
  rewriting the path or by giving a redirect location that cannot point to
  another host.
- `radixweb.middleware.util`: scheme and wildcard-subdomain matching for
  origins.

## Installation

```
pip install radixweb
```

## Routing

```python
from radixweb.router import Router, HTTPError

router = Router()
router.add("GET", "/users/:id", lambda match: "user")
router.add("GET", "/static/*", lambda match: "file")

match = router.find("GET", "/users/42")
match.path          # "/users/:id"
match.param("id")   # "42"
match.params        # {"id": "42"}
match.handler(match)  # "user"

match = router.find("GET", "/static/css/site.css")
match.param("*")    # "css/site.css"
```

`Router.find` always returns a `RouteMatch`. When the path matches a route
but not for the requested method, its handler is `method_not_allowed_handler`,
which raises an `HTTPError` with `code` 405. When nothing matches, the handler
is `not_found_handler`, which raises one with `code` 404:

```python
try:
    router.find("GET", "/nowhere").handler(None)
except HTTPError as error:
    error.code      # 404
    str(error)      # "code=404, message=Not Found"
```

The methods that can carry handlers are CONNECT, DELETE, GET, HEAD, OPTIONS,
PATCH, POST, PROPFIND, PUT, TRACE and REPORT; a handler added for any other
method is ignored. Adding a route with `None` as its handler logs an error.

## Responses

`Response` writes through any object that has a `headers` mapping and the
methods `write_header(code)` and `write(data) -> int`; `flush()` is used when
the writer has it, and raises `TypeError` otherwise.

```python
from radixweb.response import Response

response = Response(writer)
response.before(lambda: response.header.__setitem__("Server", "radixweb"))
response.write(b"hello")   # sends status 200 first, then runs the after hooks
response.status            # 200
response.size              # 5
response.committed         # True
```

A second `write_header` after the header was sent is ignored with a warning.
`reset(writer)` clears the hooks and state so the response can be reused.

## Security headers

```python
from radixweb.middleware.secure import SecureConfig, secure_headers

secure_headers()  # X-XSS-Protection, X-Content-Type-Options, X-Frame-Options defaults

headers = secure_headers(SecureConfig(hsts_max_age=3600), tls=True, forwarded_proto="")
headers["Strict-Transport-Security"]  # "max-age=3600; includeSubdomains"
```

`Strict-Transport-Security` is only produced for TLS requests or ones whose
forwarded protocol is `https`, and only when `hsts_max_age` is not zero.

## Trailing slashes

```python
from radixweb.middleware.slash import add_trailing_slash, remove_trailing_slash

result = add_trailing_slash("/docs", "page=2", redirect_code=301)
result.location  # "/docs/?page=2"
result.status    # 301

result = remove_trailing_slash("/docs/", "page=2")
result.path         # "/docs"
result.request_uri  # "/docs?page=2"
```

Redirect locations pass through `sanitize_uri`, which collapses leading
slashes and backslashes so `//example.com` becomes `/example.com`.

## Origin matching

```python
from radixweb.middleware.util import match_subdomain

match_subdomain("http://aaa.example.com", "http://*.example.com")  # True
```

## What this package does not do

There is no HTTP server, request object, handler context or middleware chain
here: the router returns a match for you to call, and the header and slash
helpers return values for your own request handling to apply. Static file
serving, request timeouts and value binding are not included.

## Running the tests

```
pip install -e ".[test]"
pytest
```