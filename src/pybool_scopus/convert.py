"""
Conversion of query files, one Scopus query per line, into a JSON array of query trees.

Lines are parsed independently of each other, so large files can be parsed in a pool of worker processes. The
output is in the same order as the input either way.

Converting a file writes the JSON array next to it, e.g., `queries.txt` is written to `queries.json`::

    from pybool_scopus.convert import convert_file
    conversion = convert_file("queries.txt")
    print(len(conversion.queries), "parsed,", len(conversion.skipped), "skipped")
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from tqdm.auto import tqdm
from tqdm.contrib.concurrent import process_map

from pybool_scopus.query import EmptyResultError, QueryNode, parse_line

logger = logging.getLogger(__name__)


@dataclass
class SkippedLine:
    line_number: int
    reason: str


@dataclass
class Conversion:
    #: One tree per parsed line, in input order.
    queries: List[QueryNode] = field(default_factory=list)
    #: Non-blank lines that did not produce a tree.
    skipped: List[SkippedLine] = field(default_factory=list)
    output_path: Optional[Path] = None

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps([query.to_dict() for query in self.queries], indent=indent, ensure_ascii=False)


def output_path_for(input_path: Union[str, Path]) -> Path:
    """
    The input path with everything from the last dot of its file name replaced by `.json`.
    """
    input_path = Path(input_path)
    stem, dot, _ = input_path.name.rpartition(".")
    return input_path.with_name((stem if dot else input_path.name) + ".json")


def _parse_numbered_line(numbered_line: Tuple[int, str]) -> Tuple[int, Optional[QueryNode], Optional[str]]:
    line_number, line = numbered_line
    try:
        return line_number, parse_line(line), None
    except EmptyResultError as e:
        return line_number, None, str(e)


def convert_lines(lines: Iterable[str], workers: int = 1, progress: bool = False) -> Conversion:
    """
    Parse each non-blank line into a query tree. Lines are numbered from one.
    """
    numbered_lines = [(i, line.strip()) for i, line in enumerate(lines, start=1)]
    numbered_lines = [(i, line) for i, line in numbered_lines if len(line) > 0]

    if workers > 1:
        chunksize = max(1, len(numbered_lines) // (workers * 4))
        results = process_map(_parse_numbered_line, numbered_lines, max_workers=workers, chunksize=chunksize,
                              desc="queries parsed", disable=not progress)
    else:
        results = [_parse_numbered_line(x) for x in tqdm(numbered_lines, desc="queries parsed", disable=not progress)]

    conversion = Conversion()
    for line_number, query, reason in results:
        if query is None:
            logger.warning("skipping line %d: %s", line_number, reason)
            conversion.skipped.append(SkippedLine(line_number, reason))
            continue
        conversion.queries.append(query)
    return conversion


def convert_file(input_path: Union[str, Path], output_path: Union[str, Path] = None, indent: Optional[int] = 2,
                 workers: int = 1, progress: bool = False) -> Conversion:
    """
    Convert the queries in `input_path` and write them as a JSON array to `output_path`, which defaults to
    `output_path_for(input_path)`. Errors reading or writing either file are raised as `OSError`.
    """
    input_path = Path(input_path)
    output_path = output_path_for(input_path) if output_path is None else Path(output_path)

    # Invalid UTF-8 is read as U+FFFD.
    with open(input_path, "r", encoding="utf-8", errors="replace") as f:
        conversion = convert_lines(f, workers=workers, progress=progress)

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(conversion.to_json(indent=indent))
        f.write("\n")

    conversion.output_path = output_path
    logger.info("wrote %d queries to %s (%d lines skipped)", len(conversion.queries), output_path,
                len(conversion.skipped))
    return conversion
