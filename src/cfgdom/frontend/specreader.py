"""
Reader for the textual CFG spec format.

Each non-comment line lists one block and its successors::

    ! a comment
    1: 2, 3
    2: 4
    3: 4
    4:

The source id ends at the first space, tab or colon; destinations are
separated by spaces, tabs or commas. Lines whose first token starts with
``!`` are comments, and blank lines are ignored.
"""

import logging
import re
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

from cfgdom.application.errors import SpecSyntaxError

LOG = logging.getLogger(__name__)

COMMENT = "!"
ENCODING = "utf-8"

_sourceSplit = re.compile(r"[ \t\n\r:]+")
_destSplit = re.compile(r"[ \t\n\r,]+")


class SpecRecord(NamedTuple):
    """One parsed ``src: dests`` line."""
    src: int
    dests: Tuple[int, ...]
    lineno: Optional[int] = None


def _blockID(token: str, lineno: Optional[int]) -> int:
    try:
        return int(token, 10)
    except ValueError:
        raise SpecSyntaxError(token, lineno) from None


def parseLine(text: str, lineno: Optional[int] = None) -> Optional[SpecRecord]:
    """Parse a single spec line.

    Returns:
        SpecRecord, or None for blank and comment lines.

    Raises:
        SpecSyntaxError: If a field is not a base-10 integer.
    """
    text = text.lstrip(" \t\n\r:")
    if not text or text.startswith(COMMENT):
        return None

    head = _sourceSplit.split(text, maxsplit=1)
    src = _blockID(head[0], lineno)

    rest = head[1] if len(head) > 1 else ""
    dests = tuple(_blockID(tok, lineno) for tok in _destSplit.split(rest) if tok)

    record = SpecRecord(src, dests, lineno)
    LOG.debug("%s: %s", src, ", ".join(str(d) for d in dests))
    return record


def readSpec(stream: Iterable[str]) -> Iterator[SpecRecord]:
    """Yield a SpecRecord for every non-comment line of ``stream``."""
    for lineno, line in enumerate(stream, 1):
        record = parseLine(line, lineno)
        if record is not None:
            yield record


def parseSpecText(text: str) -> List[SpecRecord]:
    return list(readSpec(text.splitlines()))


def _decodeLines(raw: Iterable[bytes]) -> Iterator[str]:
    for lineno, line in enumerate(raw, 1):
        try:
            yield line.decode(ENCODING)
        except UnicodeDecodeError:
            raise SpecSyntaxError(line.rstrip(b"\r\n"), lineno, "undecodable line") from None


def loadSpecFile(path) -> List[SpecRecord]:
    """Read every record from the UTF-8 spec file at ``path``.

    Raises:
        SpecSyntaxError: If a line is malformed or is not valid UTF-8.
        OSError: If the file cannot be opened or read.
    """
    with open(path, "rb") as f:
        return list(readSpec(_decodeLines(f)))
