"""Line oriented request/response loop.

Each request is one line holding a query. The response is one matched path
per line, best first, followed by an ``END`` line. A query without matches
is answered with a single blank line before ``END``.
"""

from __future__ import annotations

import logging
from typing import IO, Iterable, List

from fuzzyfind.index.search import Finder
from fuzzyfind.models import MatchResult

LOGGER = logging.getLogger(__name__)

TERMINATOR = "END"


def format_response(results: Iterable[MatchResult]) -> List[str]:
    lines = [result.path for result in results]
    if not lines:
        lines.append("")
    lines.append(TERMINATOR)
    return lines


def answer(finder: Finder, query: str, *, limit: int | None = None) -> List[str]:
    """Answer one request, never raising."""
    try:
        results = finder.search(query, limit=limit)
    except Exception:
        LOGGER.exception("Query %r failed", query)
        results = []
    return format_response(results)


def serve_lines(
    finder: Finder,
    source: IO[str],
    sink: IO[str],
    *,
    limit: int | None = None,
) -> int:
    """Answer queries read from ``source`` until end of input.

    A trailing line without a newline is treated as end of input. Returns the
    number of queries answered.
    """
    answered = 0
    for line in iter(source.readline, ""):
        if not line.endswith("\n"):
            LOGGER.debug("Ignoring unterminated final line")
            break
        sink.write("\n".join(answer(finder, line, limit=limit)) + "\n")
        sink.flush()
        answered += 1
    return answered
