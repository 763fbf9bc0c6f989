# doutil

Small, dependable helpers for everyday Python code, plus a few tools for
working with Go modules and generating Go mock source text.

## Installation

```
pip install doutil
```

To run the test suite from a checkout:

```
pip install ".[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `doutil.unique` | `unique` (order-keeping de-duplication), `contains`, `first`, `last`, `index` (raise `IndexError` when there is no item) and `first_or`, `last_or`, `index_or` (return a default instead) |
| `doutil.state_machine` | `StateMachine` maps each known state to a function returning the next state; `StateMachine.from_mapping`, `with_func`, `run` |
| `doutil.slice` | `Slice`, a lock-guarded list with `append`, `index`, `range`, `reset`, `len()` and iteration over a snapshot |
| `doutil.retry` | `retry_with_times` and `retry_with_deadline`, sleeping 1, 3, 7, … seconds between attempts; raise `PermanentError` from the callable to stop at once |
| `doutil.text` | `fuzz_wrap` for SQL `LIKE` patterns, `string_to_bytes`, `bytes_to_string` (UTF-8) |
| `doutil.valueof` | `value_of(obj, field, expected_type)` reads an attribute or mapping key with a type check and returns `(value, found)`; `zero(tp)` gives a type's zero value |
| `doutil.structconv` | `conv_by_name` and `conv_slice_by_name` copy same-named, same-typed fields between objects (dataclass fields marked `metadata={"embedded": True}` are flattened); `make_slice` builds fresh instances |
| `doutil.url` | `replace_ip` swaps an address in a link's host, or anywhere in a link without a host |
| `doutil.timeutil` | `date`, `date_local`, `day_zero`, `month_first`, `year_first`, `today_zero`, `this_month_first`, `this_year_first`, `parse_time`, `is_expired`, `age_by_birth` |
| `doutil.signature` | `Signer` signs bytes with RSA PKCS#1 v1.5 / SHA-256 from a base64 PKCS#8 DER key and returns a base64 signature |
| `doutil.singleflight` | `single_flight(key, fn)` lets callers sharing a key share one call's result until `forgot_key(key)`; failures raise `SingleFlightError` |
| `doutil.timeout` | `run_with_timeout(seconds, param, func)` returns `(result, True)` if the call finishes in time, else `(None, False)` |
| `doutil.worker` | `Worker` runs `Job`s on threads with a concurrency limit, per-job timeouts (checked through `JobContext.done()`) and error handlers |
| `doutil.tcp_proxy` | `tcp_proxy`, `tcp_proxy_default_handler`, `tcp_send`, `tcp_recv` for plain TCP forwarding with `"host:port"` addresses |
| `doutil.router` | `register_router`, `http_handler_func`, `Route`, `new_route`, `RouteOption`, and the `RouteRegister` / `RouteHandler` abstract classes |
| `doutil.parser.import_path` | `ImportPath` finds the governing `go.mod`, derives the working directory's import path and lists every module under a directory; `module_path` reads the module line |
| `doutil.parser.option` | `Op` and `Option` describing a parser run |
| `doutil.parser.model` | `Func`, `Param`, `Field`, `Struct`, `ExprResult`, `StmtResult`, `PkgInfo`; call-graph lines and interface declarations |
| `doutil.parser.mock` | `Interface`, `Package`, `Packages`: proxy-mock and interface source text, optionally written to `.go` files |

## Examples

```python
from doutil.unique import unique, first_or
from doutil.retry import retry_with_times, PermanentError
from doutil.singleflight import single_flight

unique([1, 22, 33, 22, 33, 4])      # [1, 22, 33, 4]
first_or([], 0)                     # 0

def fetch():
    ...

retry_with_times(3, fetch)          # up to 3 attempts, sleeping 1s then 3s after failures
single_flight("user:1", fetch)      # concurrent callers share one fetch
```

```python
from doutil.state_machine import StateMachine

machine = StateMachine.from_mapping({1: lambda s: 2, 2: lambda s: 3, 3: lambda s: 1})
machine.run(1)  # 2
machine.run(9)  # 9, unknown states are returned unchanged
```

```python
from doutil.worker import Worker, Job

with Worker(10) as worker:          # start() on entry, stop() on exit
    worker.push(Job(lambda ctx: None, 1.0, None))
```

```python
from datetime import datetime
from doutil.timeutil import age_by_birth

age_by_birth(datetime(2006, 8, 4), datetime(2024, 8, 4))  # (18, "岁")
```

`age_by_birth` reports its unit as 岁 (years), 月 (months) or 天 (days).
Local times throughout `doutil.timeutil` are naive datetimes.

```python
from doutil.parser.model import Func, Param, Struct

s = Struct(name="fileImpl", methods=[
    Func(name="Read", params=[Param("p", "[]byte")], results=[Param("", "int")]),
])
s.make_interface()  # 'type IFile interface{Read(p []byte) int}'
```

## What it does not do

- `doutil.parser` does not read or type-check Go source. `Struct`, `Func`,
  `Interface` and `Package` records are built by the caller; the package
  turns them into call graphs, interface declarations and mock source text.
  Written `.go` files are not run through a formatter.
- `doutil.router` has no HTTP server of its own; it wires handlers into
  whatever `RouteRegister` you supply.
- There is no command-line program; everything is used as a library.