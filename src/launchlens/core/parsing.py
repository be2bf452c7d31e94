"""CSV parsing of uploaded review files."""

import csv
import io
import logging
import re
from typing import List, Dict, Union, BinaryIO, TextIO

from .constants import ReviewColumns, FileConstants
from .exceptions import MalformedInputError
from .models import Review

logger = logging.getLogger(__name__)

_RATING = re.compile(r"[+-]?[0-9]+")

ReviewSource = Union[bytes, str, BinaryIO, TextIO]


def _read_text(source: ReviewSource) -> str:
    """Return the whole upload as text, reporting the line of any undecodable byte."""
    data = source.read() if hasattr(source, "read") else source
    if isinstance(data, str):
        return data
    try:
        return data.decode(FileConstants.CSV_ENCODING)
    except UnicodeDecodeError as e:
        line = data[:e.start].count(b"\n") + 1
        raise MalformedInputError(f"invalid {FileConstants.CSV_ENCODING} byte at offset {e.start}", line=line) from e


def _parse_rating(value: str) -> int:
    # Lenient on purpose: anything but an optionally signed run of ASCII digits counts as 0.
    if not _RATING.fullmatch(value):
        return 0
    try:
        return int(value)
    except ValueError:
        # past the interpreter's int string length limit
        return 0


def _build_review(record: List[str], columns: Dict[str, int]) -> Review:
    def _get(name):
        idx = columns.get(name)
        return record[idx] if idx is not None else ""

    return Review(
        id=_get(ReviewColumns.ID),
        date=_get(ReviewColumns.DATE),
        user_id=_get(ReviewColumns.USER_ID),
        review_text=_get(ReviewColumns.REVIEW_TEXT),
        rating=_parse_rating(_get(ReviewColumns.RATING)),
        source=_get(ReviewColumns.SOURCE),
    )


def parse_reviews(source: ReviewSource) -> List[Review]:
    """Parse a header-led CSV into reviews, preserving row order.

    Columns missing from the header leave that field empty (or 0 for the
    rating) on every row; unrecognised columns are ignored. A row whose field
    count differs from the header, broken quoting, or undecodable bytes abort
    the whole parse with :class:`MalformedInputError`.
    """
    text = _read_text(source)
    # a single field may be as long as the whole upload
    csv.field_size_limit(max(csv.field_size_limit(), len(text)))
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)

    try:
        header = next((row for row in reader if row), None)
    except csv.Error as e:
        raise MalformedInputError(f"failed to read CSV header: {e}", line=reader.line_num) from e
    if header is None:
        raise MalformedInputError("failed to read CSV header: no header row")

    # later duplicates win
    columns = {name.strip(): i for i, name in enumerate(header)}
    unknown = [name for name in columns if name not in ReviewColumns.ALL]
    if unknown:
        logger.debug(f"Ignoring unrecognised columns: {unknown}")

    reviews = []
    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            raise MalformedInputError(f"error reading record: {e}", line=reader.line_num) from e

        if not record:
            continue
        if len(record) != len(header):
            raise MalformedInputError(
                f"wrong number of fields: expected {len(header)}, got {len(record)}",
                line=reader.line_num,
            )
        reviews.append(_build_review(record, columns))

    logger.info(f"Parsed {len(reviews)} reviews")
    return reviews


class ReviewParser:
    """CSV parser with a swappable entry point for the upload boundary."""

    def parse(self, source: ReviewSource) -> List[Review]:
        return parse_reviews(source)
