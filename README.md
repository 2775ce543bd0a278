# router_hosts

Building blocks for managing a router's hosts file through a central
service: input validation, client and server configuration, output
formatting, error reporting, chunked file import and command-line parsing.

Requires Python 3.11 or later. The only runtime dependency is
`platformdirs`.

## Modules

### `router_hosts.validation`

- `validate_ip_address(ip)` parses an IPv4 or IPv6 address and returns an
  `ipaddress.IPv4Address` or `ipaddress.IPv6Address`. Addresses with a
  scope suffix (`fe80::1%eth0`) are rejected.
- `validate_hostname(hostname)` returns the hostname unchanged if it is a
  valid DNS name: non-empty, at most 253 bytes, no leading or trailing dot
  or hyphen, no empty labels, and every label 1 to 63 ASCII letters, digits
  or hyphens that does not start or end with a hyphen.

Failures raise `InvalidIpAddressError` or `InvalidHostnameError`. Both
derive from `ValidationError`, itself a `ValueError`; the reason is kept in
the `detail` attribute.

### `router_hosts.errors`

- `StatusCode`: the gRPC status codes as an `IntEnum`.
- `RpcStatus(code, message)`: an exception carrying a status code and a
  message.
- `format_grpc_error(status)` turns a status into a message for the user,
  for example `"Invalid input: ..."`, `"Not found: ..."` or
  `"Server error: ..."`.
- `exit_code_for_status(status)` returns `EXIT_USAGE` (2) for an invalid
  argument, `EXIT_CONFLICT` (3) for an aborted call (version conflict) and
  `EXIT_ERROR` (1) otherwise.

### `router_hosts.output`

- `HostEntry` and `Snapshot` dataclasses, each with `headers()`, `row()` and
  `to_dict()`. In rows, IDs longer than 12 characters are cut to 12 and
  followed by `...`; a snapshot's creation time is shown as
  `YYYY-MM-DD HH:MM UTC`. `to_dict()` leaves timestamps out.
- `Timestamp(seconds, nanos)`: seconds and nanoseconds since the Unix epoch.
- `OutputFormat`: `TABLE`, `JSON` or `CSV`.
- `print_items(items, format, stream)` and `print_item(item, format, stream)`
  write an aligned table, pretty-printed JSON or CSV to `stream`
  (standard output by default). A table of no items prints nothing; CSV
  always has a header line.

### `router_hosts.client_config`

`ClientConfig.load(config_path, cli_server, cli_cert, cli_key, cli_ca)`
resolves the server address and the client certificate, key and CA paths.
Each value is taken from the argument if given, else from the environment
(`ROUTER_HOSTS_SERVER`, `ROUTER_HOSTS_CERT`, `ROUTER_HOSTS_KEY`,
`ROUTER_HOSTS_CA`), else from the TOML file (`[server] address` and
`[tls] cert_path`, `key_path`, `ca_cert_path`). Without `config_path` the
file at `default_config_path()` (`router-hosts/client.toml` in the user's
config directory) is read if it exists; an explicit `config_path` that does
not exist is an error. `expand_tilde(path)` replaces a leading `~/` with the
home directory. A missing value or a bad file raises `ClientConfigError`.

### `router_hosts.server_config`

`Config.from_toml(text)` parses the server configuration into `Config`
with `server` (`ServerConfig`), `database` (`DatabaseConfig`), `tls`
(`TlsConfig`), `retention` (`RetentionConfig`, default 50 snapshots and
30 days) and `hooks` (`HooksConfig`, lists of `on_success` and `on_failure`
commands, empty by default). `Config.from_file(path)` first calls
`check_config_permissions(path)`, then parses the file and raises
`MissingBindAddressError` or `MissingHostsFilePathError` if either field is
empty. On POSIX systems a world-writable file raises `InsecureConfigError`
and a group-writable one logs a warning. All of these derive from
`ConfigError`.

### `router_hosts.chunks`

`read_file_chunks(path, format, conflict_mode)` resolves the path
(following symlinks), requires a regular, non-empty file and returns a list
of `ImportChunk` of at most `CHUNK_SIZE` (64 KiB) bytes each. Only the first
chunk carries `format` and `conflict_mode`; only the last has `last_chunk`
set. Problems raise `ImportFileError`.

### `router_hosts.cli`

- `build_parser()` returns an `argparse` parser for
  `host add|get|update|delete|list|search|import|export`,
  `snapshot create|list|rollback|delete` and `config`, with the global
  options `--config`, `--server`, `--cert`, `--key`, `--ca`, `--verbose`,
  `--quiet` and `--format {table,json,csv}`, accepted before or after a
  subcommand.
- `parse_args(argv)` parses arguments; on a usage error it exits with
  status 2.
- `show_config(args, out, err)` prints the effective client configuration
  and returns 0, or prints `Configuration error: ...` and returns 2.

## Examples

```python
from router_hosts.validation import ValidationError, validate_hostname, validate_ip_address

validate_hostname("server.local")
validate_ip_address("192.168.1.1")

try:
    validate_hostname("in..valid")
except ValidationError as exc:
    print(exc)  # Invalid hostname: hostname cannot contain consecutive dots
```

```python
from router_hosts.client_config import ClientConfig

config = ClientConfig.load(None, "router.local:50051", "/etc/certs/client.crt",
                           "/etc/certs/client.key", "/etc/certs/ca.crt")
print(config.server_address)
```

```python
from router_hosts.output import HostEntry, OutputFormat, print_items

entries = [HostEntry(id="01J", ip_address="192.168.1.1", hostname="test.local",
                     tags=["prod", "web"])]
print_items(entries, OutputFormat.CSV)
```

```python
from router_hosts.cli import parse_args, show_config

args = parse_args(["--server", "localhost:50051", "config"])
show_config(args)
```

A server configuration file looks like this:

```toml
[server]
bind_address = "0.0.0.0:50051"
hosts_file_path = "/etc/hosts"

[database]
path = "/var/lib/router-hosts/hosts.db"

[tls]
cert_path = "/etc/router-hosts/server.crt"
key_path = "/etc/router-hosts/server.key"
ca_cert_path = "/etc/router-hosts/ca.crt"

[retention]
max_snapshots = 50
max_age_days = 30

[hooks]
on_success = []
on_failure = []
```

## What this package does not do

- It has no network client: nothing connects to a server, sends requests
  or reads responses. Of the command-line subcommands, only `config` has
  behaviour (`show_config`); the `host` and `snapshot` subcommands are
  parsed but not carried out.
- It has no server: it neither listens for requests nor stores host
  entries or snapshots, generates a hosts file or runs hook commands. The
  server configuration is only read and checked.
- It installs no command; the parser is used from Python.