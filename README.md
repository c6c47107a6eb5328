# pdascope

pdascope analyses the seeds behind Solana program derived addresses (PDAs).
It groups PDAs by the shape of their seeds and reports the shapes that recur.
It can also match PDAs against known seed layouts and suggest which seed type
most likely belongs at each position. A few helpers are included for putting
the results behind an HTTP interface: response envelopes, request checks,
headers and server settings.

It uses only the Python standard library and runs on Python 3.10 and later.

## Modules

- `pdascope.models`: the data types.
  - `SeedType` is an enum with the values `string`, `pubkey`, `u8`, `u16`,
    `u32`, `u64` and `bytes`.
  - `SeedValue(kind, value)` is a frozen seed. It checks its value: strings
    for `string` and `pubkey`, bytes for `bytes`, and integers in range for
    the unsigned kinds. `seed_type()` returns the kind's name.
  - `SeedTemplate`, `PdaInfo` (the bump must lie in 0..255) and `PdaPattern`.
- `pdascope.patterns`: `PatternDetector` and `PatternRegistry`, with the result
  types `DetectedPattern`, `PatternMatch` and `PatternSuggestion`.
- `pdascope.stats`: `ProcessingStats` holds counters and gives a throughput
  figure. `extract_seed_pattern` and `analyze_pda_patterns` summarise how often
  each seed shape occurs for one program, as `PdaPatternAnalysis` records.
- `pdascope.errors`: `ApiError`, an exception that carries an HTTP status, and
  the `ApiResponse` envelope. Both have `to_dict()` for JSON output.
- `pdascope.middleware`: `extract_client_ip`, `security_headers`,
  `cors_headers` and `validate_request`. `validate_request` raises
  `RequestRejected`.
- `pdascope.config`: `ServerConfig`, `SimpleServerConfig`,
  `ConfigurationError` and `health_check_server`.

## Pattern detection

```python
from pdascope.models import PdaInfo, SeedType, SeedValue
from pdascope.patterns import PatternDetector

program = "11111111111111111111111111111112"
pdas = [
    PdaInfo("AddrA", program, [SeedValue(SeedType.STRING, "user"), SeedValue(SeedType.U64, 1)], 254),
    PdaInfo("AddrB", program, [SeedValue(SeedType.STRING, "user"), SeedValue(SeedType.U64, 2)], 253),
]
detector = PatternDetector()
patterns = detector.detect_patterns(program, pdas)
patterns[0].pattern_signature  # "string:u64"
patterns[0].frequency          # 2
```

`detect_patterns(program_id, pdas)` looks only at the PDAs that belong to
`program_id`. The signature of a PDA is its seed type names joined with
colons. A PDA with no seeds has the signature `"empty"`. A signature becomes a
`DetectedPattern` only if it occurs at least twice. Each pattern carries a
generated seed template (`seed_0`, `seed_1`, ...), up to five example
addresses and a confidence. The confidence is the pattern's share of all PDAs
passed in, as a percentage, capped at 95. Results are sorted by frequency,
highest first, then by confidence. The detector also keeps the latest results
per program in `detected_patterns`.

`match_against_known_patterns(pda)` scores the PDA's seeds against every
known pattern of its program and returns the matches best first. The score is
the percentage of positions whose seed types agree. A template of a different
length is skipped.

`generate_pattern_suggestions(program_id, pdas)` returns one
`PatternSuggestion` per seed position. It holds the most common type at that
position, how many times that type occurs, and its share of the seeds at the
position as a percentage.

`PatternRegistry` wraps a detector and comes loaded with two layouts: the SPL
token "Token Account" and the Metaplex "Metadata Account". Its methods are
`add_pattern`, `detect_patterns`, `match_pda` and `get_suggestions`.

## Processing statistics

`ProcessingStats` starts its clock when it is created. `processing_duration()`
returns the elapsed `timedelta`. `transactions_per_second()` divides by the
whole seconds elapsed and returns 0.0 until a full second has passed.

`analyze_pda_patterns(program_id, pdas)` counts the seed shapes of the
program's PDAs and returns them most frequent first. The examples list is the
same for every entry: the first five addresses of that program.

## HTTP helpers

```python
from pdascope.errors import ApiError, ApiResponse

ApiError.not_found("Program not found").to_dict()
# {"error": "Not Found", "message": "Program not found", "status_code": 404}

ApiResponse.ok({"total": 3}).to_dict()["success"]  # True
```

`ApiError` has the constructors `bad_request`, `not_found`,
`internal_server_error`, `not_implemented` and `unprocessable_entity`.
`ApiResponse.ok(data)` and `ApiResponse.failure(message)` both stamp the
current UTC time.

```python
from pdascope.middleware import extract_client_ip

extract_client_ip({"X-Forwarded-For": "192.168.1.1, 10.0.0.1"})  # "192.168.1.1"
extract_client_ip({})                                              # None
```

`extract_client_ip` checks `X-Forwarded-For` first, then `X-Real-IP`, then
the `for=` part of `Forwarded`. Header names are matched without regard to
case.

`security_headers()` returns the content-type, frame, XSS, referrer and
content-security headers. `cors_headers(origin)` echoes the given origin, or
`*` if none is given.

`validate_request(method, path, headers)` raises `RequestRejected` with one of
these statuses:

- 400 when a POST has no `Content-Type`.
- 415 when a POST has a `Content-Type` that does not start with
  `application/json`.
- 414 when the path is longer than 2048 characters.

## Configuration

```python
from pdascope.config import ServerConfig

config = ServerConfig.from_env({"HOST": "0.0.0.0", "PORT": "3000"})
config.bind_address()  # "0.0.0.0:3000"
```

`from_env` reads the mapping it is given, or `os.environ` when it is given
none. Both configurations read these variables:

| Variable           | Default     |
|--------------------|-------------|
| `HOST`             | `127.0.0.1` |
| `PORT`             | `8080`      |
| `STATIC_FILES_DIR` | unset       |

`ServerConfig` also reads `DATABASE_URL` and `LOG_LEVEL`. `LOG_LEVEL`
defaults to `info`.

The two handle a bad `PORT` differently:

- `ServerConfig` raises `ConfigurationError`.
- `SimpleServerConfig` falls back to 8080.

`health_check_server(config)` returns True when the configuration yields a
non-empty bind address.

## What it does not do

pdascope is a library only. It has no command-line program and does not run
an HTTP server: the settings and helpers above are for an application that
serves one. It does not derive addresses from seeds, connect to a Solana
node, fetch or decode transactions, or store anything in a database.
`DATABASE_URL` is read but never used.