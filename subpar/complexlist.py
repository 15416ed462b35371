"""Print an HTML table of station complexes."""

from __future__ import annotations

import argparse
from collections.abc import Iterable, Sequence

import httpx

from .api import AdaStatus, ApiClient, ComplexInfo

_BOROUGH_SCORES = {
    "M": 0,
    "Manhattan": 0,
    "Bk": 1,
    "Brooklyn": 1,
    "Q": 2,
    "Queens": 2,
    "Bx": 3,
    "Bronx": 3,
    "SI": 4,
    "Staten Island": 4,
}

_BOROUGH_NAMES = {
    "M": "Manhattan",
    "Bk": "Brooklyn",
    "Q": "Queens",
    "Bx": "Bronx",
    "SI": "Staten Island",
}

_ADA_ICONS = {
    AdaStatus.FULL: ("G", "Full"),
    AdaStatus.PARTIAL: ("Y", "Part"),
    AdaStatus.NO: ("R", "None"),
}


def score_borough(borough: str) -> int:
    """Rank a borough (abbreviated or spelled out) for ordering the table."""
    try:
        return _BOROUGH_SCORES[borough]
    except KeyError:
        raise ValueError(f"unknown borough '{borough}'") from None


def spell_borough(borough: str) -> str:
    """Spell out an abbreviated borough name."""
    try:
        return _BOROUGH_NAMES[borough]
    except KeyError:
        raise ValueError(f"unknown borough '{borough}'") from None


def sort_complexes(complexes: Iterable[ComplexInfo]) -> list[ComplexInfo]:
    """Order by borough, then by number of routes, most first."""
    return sorted(complexes, key=lambda c: (score_borough(c.borough), 100 - len(c.routes)))


def render_row(complex_info: ComplexInfo) -> str:
    """Render one complex as an HTML table row."""
    cid = complex_info.complex_id
    bullets = "".join(
        f' <img class="icon bullet" alt="{r}" src="/f/R{r}.svg" />'
        for r in sorted(complex_info.routes)
    )
    col, txt = _ADA_ICONS[complex_info.ada]
    ada = f'<img id="ada{cid}" class="icon" alt="{txt}" src="/f/ada{col}.svg"> {txt} </img>'
    borough = spell_borough(complex_info.borough)
    link = f'<a href="/c/{cid}"> {complex_info.stop_name} </a>'
    return f"<tr> <td>{bullets}</td> <td>{ada}</td> <td>{link}</td> <td>{borough}</td> </tr>"


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="complexlist", description="Print an HTML table row for every station complex."
    )
    parser.add_argument("--cache-dir", default="cache", help="where to keep fetched responses")
    args = parser.parse_args(argv)
    with httpx.Client() as http:
        complexes = ApiClient(http=http, cache_dir=args.cache_dir).get_complexes()
    for cplx in sort_complexes(complexes):
        print(render_row(cplx))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())