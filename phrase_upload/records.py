"""Parser for the plain-text key/value files uploaded to Phrase."""

import logging
from dataclasses import dataclass
from pathlib import Path

from phrase_upload.errors import FileReadError, ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingRecord:
    """A key and its translation, waiting to be created on Phrase."""

    key: str
    value: str


def parse_records(contents: str, source: str = "<string>") -> list[PendingRecord]:
    """Split file contents into key/value records.

    Blank lines are dropped first. The remaining lines alternate key, value,
    key, value, so lines are assigned purely by position.

    Args:
        contents: Raw text of the input file.
        source: Name used in the error message, usually the file path.

    Returns:
        Records in the order they appear in the text.

    Raises:
        ParseError: If a key line has no value line after it.
    """
    keys: list[str] = []
    values: list[str] = []

    # Only "\n" ends a line; a trailing "\r" belongs to the line ending.
    lines = [line.removesuffix("\r") for line in contents.split("\n")]
    lines = [line for line in lines if line]
    for idx, line in enumerate(lines):
        if idx % 2 == 0:
            keys.append(line)
        else:
            values.append(line)

    if len(keys) != len(values):
        raise ParseError(file=source)

    return [PendingRecord(key=key, value=value) for key, value in zip(keys, values)]


def load_records(path: str | Path) -> list[PendingRecord]:
    """Read a key/value file from disk and parse it.

    Args:
        path: File path to the input file.

    Returns:
        Parsed records in file order.

    Raises:
        FileReadError: If the file cannot be opened or decoded.
        ParseError: If the file has an unpaired key line.
    """
    file_path = Path(path)
    try:
        with open(file_path, "r", encoding="utf-8", newline="") as f:
            contents = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(str(path), str(e)) from e

    records = parse_records(contents, source=str(path))
    logger.debug("Parsed %d records from %s", len(records), path)
    return records
