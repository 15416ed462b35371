# subpar

Tools for working with New York City subway data: descriptors for the
realtime feeds, a strict reader for comma-separated manifest files, and
parsers and a client for the station accessibility datasets (elevator and
escalator equipment, outages, station complexes and entrances).

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Realtime feed descriptors

`subpar.feed.Feed` pairs a feed label with the URL it is served from.
`Feed.from_static` accepts the feed groups `"1234567"`, `"ace"`, `"bdfm"`,
`"g"`, `"jz"`, `"nqrw"`, `"l"` and `"si"`, and raises `ValueError` for
anything else. Constructing a `Feed` directly also raises `ValueError` when
the URL has no scheme.

```python
from subpar.feed import Feed

feed = Feed.from_static("nqrw")
print(feed.name(), feed.url)
print(str(feed))   # "F.nqrw   "
```

`subpar.units.ByteSize` formats a byte count with the largest fitting
suffix among `b`, `kb` and `mb` (steps of 1024): `str(ByteSize(123 * 1024))`
is `"123kb"`.

## Manifest CSV files

`subpar.csvrows.read_rows(path, header, parse)` opens a file, checks that its
first line equals `header`, and yields `parse(row)` for every following line,
where `row` is a `CsvRow`. A `CsvRow` hands out cells in order:

- `next()` – the next cell as a string
- `next_n(n)` – a list of the next `n` cells
- `next_as(convert)` – the next cell passed through `convert`, e.g. `float`
- `next_time()` – the next cell parsed as `hh:mm:ss` into an `(h, m, s)` tuple
- `finish()` – check that no cells are left over

Any deviation – wrong header, too few or too many cells, a cell of the wrong
type, a malformed time – raises `subpar.csvrows.CsvError` with the line
number and text.

```python
from subpar.csvrows import read_rows

def parse(row):
    stop_id, _, name = row.next_n(3)
    return stop_id, name

for stop_id, name in read_rows("stops.csv", "stop_id,stop_code,stop_name", parse):
    print(stop_id, name)
```

## Accessibility data

`subpar.api.ApiClient(http=None, cache_dir="cache")` fetches the open-data
JSON endpoints with an `httpx.Client` and parses them into records:

- `get_equipment()` → `AccessEquipment`
- `get_outage()` → `AccessOutage`
- `get_outages_nocache()` → `AccessOutage`, without writing a cache file
- `get_complexes()` → `ComplexInfo`
- `get_entrances()` → `SubwayEntrance`, paged 1000 at a time (up to 10 pages)

Each response body is written to the cache directory (a failure to write
is only logged); pass `cache_dir=None` to skip that. Request failures,
invalid JSON and records of the wrong shape raise `subpar.api.ApiError`.

```python
from subpar.api import ApiClient

api = ApiClient()
for outage in api.get_outage():
    print(outage.station, outage.equipment, outage.estimatedreturntoservice)
```

The records can also be built from already-loaded JSON with their
`from_json` class methods. The field parsers are public too: `parse_bool`
(`Y`/`N`, `T`/`F`, `YES`/`NO`, `TRUE`/`FALSE`, or `0`/`1`), `parse_ada`
(`"0"`, `"1"`, `"2"` → `AdaStatus.NO`, `FULL`, `PARTIAL`), `parse_date`
(`"06/26/2023 09:35:00 AM"` style, fixed at UTC+5), `parse_list` and
`parse_route_list` (which drops `LIRR` and `METRO-NORTH`).

## Station complex table

```
subpar-complexlist [--cache-dir DIR]
```

fetches the station complexes and prints an HTML table row for each one,
ordered by borough and then by the number of routes serving it (most
first), with route bullets, an ADA accessibility badge, a link and the
borough name. The same pieces are available as `subpar.complexlist`
functions: `score_borough`, `spell_borough`, `sort_complexes` and
`render_row`.

## What this package does not do

- It does not download or decode realtime feeds: `Feed` only describes
  where a feed lives, and there is no client that polls feeds or parses
  their protocol-buffer contents.
- It has no ready-made reader for the stop manifest (`stops.txt`); use
  `read_rows` with your own row parser.
- It stores nothing in a database; the only persistence is the response
  cache written by `ApiClient`.