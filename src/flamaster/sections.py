"""Sectioned CSV parser.

A flamaster input is a plain CSV stream split into sections. A row whose first
field is exactly ``options``, ``headers`` or ``items`` opens a section; a row
whose first field is empty closes it again::

    options,
    os,true
    ,
    headers,
    title,Price list
    ,
    items,
    name,price
    apple,1.20
    pear,0.95

Options and headers rows are ``key,value`` pairs. The first row of an items
section names the columns, every later row becomes one item.
"""

import csv
import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import InputReadError, MalformedInputError

logger = logging.getLogger(__name__)

Record = Sequence[str]
Item = Dict[str, str]


class Section(enum.Enum):
    NONE = ''
    OPTIONS = 'options'
    HEADERS = 'headers'
    ITEMS = 'items'


# Case-sensitive marker text -> section
SECTION_MARKERS = {s.value: s for s in Section if s is not Section.NONE}


@dataclass(frozen=True)
class ParseResult:
    options: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    items: Tuple[Item, ...] = ()


class SectionParser:
    """Row-by-row state machine over a sectioned CSV stream.

    Feed records in file order with :meth:`feed`, then collect the parsed
    structures with :meth:`result`. Each activation of an items section
    starts with a fresh column header row.
    """

    def __init__(self):
        self.section = Section.NONE
        self.item_headers: Optional[List[str]] = None
        self.options: Dict[str, str] = {}
        self.headers: Dict[str, str] = {}
        self.items: List[Item] = []

    def feed(self, record: Record, line: Optional[int] = None) -> None:
        logger.debug("At row %s: %r", line if line is not None else '?', list(record))
        first = record[0] if record else ''

        # Section transitions
        if first == '':
            if self.section is not Section.NONE:
                logger.debug("Closing section '%s'", self.section.value)
                self.section = Section.NONE
            return
        if self.section is Section.NONE:
            section = SECTION_MARKERS.get(first)
            if section is None:
                raise MalformedInputError(
                    f"data row {list(record)!r} outside of any section", line=line
                )
            logger.debug("Opening section '%s'", section.value)
            self.section = section
            if section is Section.ITEMS:
                self.item_headers = None
            return

        # Collect
        if self.section is Section.ITEMS:
            self._collect_item(record)
        elif self.section is Section.HEADERS:
            key, value = self._key_value(record, line)
            self.headers[key] = value
        elif self.section is Section.OPTIONS:
            key, value = self._key_value(record, line)
            self.options[key] = value

    def _collect_item(self, record: Record) -> None:
        if self.item_headers is None:
            self.item_headers = list(record)
            return
        # zip() stops at the shorter side: missing trailing columns stay absent
        self.items.append(dict(zip(self.item_headers, record)))

    def _key_value(self, record: Record, line: Optional[int]) -> Tuple[str, str]:
        if len(record) < 2:
            raise MalformedInputError(
                f"{self.section.value} row needs a key and a value, got {list(record)!r}",
                line=line,
            )
        return record[0], record[1]

    def result(self) -> ParseResult:
        return ParseResult(
            options=dict(self.options),
            headers=dict(self.headers),
            items=tuple(dict(item) for item in self.items),
        )


def parse_records(records: Iterable[Record]) -> ParseResult:
    """Fold records through a fresh :class:`SectionParser`.

    Records are numbered from 1 for diagnostics.
    """
    parser = SectionParser()
    for idx, record in enumerate(records, start=1):
        parser.feed(record, line=idx)
    return _logged(parser.result())


def parse_csv(path) -> ParseResult:
    """Parse the sectioned CSV file at ``path``."""
    logger.debug("Opening input CSV at '%s'...", path)
    try:
        fh = open(path, newline='', encoding='utf-8-sig')
    except OSError as e:
        raise InputReadError(f"cannot open CSV '{path}': {e}") from e

    parser = SectionParser()
    with fh:
        reader = csv.reader(fh)
        try:
            for record in reader:
                # The csv module yields [] for blank lines; they carry no fields at all
                if not record:
                    continue
                parser.feed(record, line=reader.line_num)
        except csv.Error as e:
            raise InputReadError(f"{path}: line {reader.line_num}: {e}") from e
        except UnicodeDecodeError as e:
            raise InputReadError(f"{path}: not valid UTF-8: {e}") from e
        except OSError as e:
            raise InputReadError(f"cannot read CSV '{path}': {e}") from e
    return _logged(parser.result())


def _logged(result: ParseResult) -> ParseResult:
    logger.debug("Parsed options: %r", result.options)
    logger.debug("Parsed headers: %r", result.headers)
    logger.debug("Parsed items: %r", list(result.items))
    return result
