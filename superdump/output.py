"""
Output stream handling for superdump.
"""

import gzip
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

USE_STDOUT = '-'


class SqlWriter:
    """Append-only writer for the generated script.

    Text is encoded before writing; bytes (escaped row values) are written
    unchanged.
    """

    def __init__(self, stream: BinaryIO, encoding: str = 'utf-8'):
        self.stream = stream
        self.encoding = encoding

    def write(self, data: Union[str, bytes]) -> None:
        if isinstance(data, str):
            data = data.encode(self.encoding)
        self.stream.write(data)

    def writeln(self, data: Union[str, bytes] = '') -> None:
        self.write(data)
        self.stream.write(b'\n')

    def flush(self) -> None:
        self.stream.flush()


def resolve_output_path(output: Optional[str], compress: bool) -> Optional[Path]:
    """Return the file path to write to, or None for standard output."""
    if not output or output == USE_STDOUT:
        return None
    path = Path(output)
    if compress and path.suffix != '.gz':
        path = Path(str(path) + '.gz')
    return path


@contextmanager
def open_output(output: Optional[str] = USE_STDOUT, compress: bool = False) -> Iterator[SqlWriter]:
    """Open the dump destination and yield a writer for it.

    Standard output is flushed but never closed. Compression only applies to
    file destinations.
    """
    path = resolve_output_path(output, compress)
    if path is None:
        if compress:
            logging.warning("Compression is ignored when writing to standard output")
        writer = SqlWriter(sys.stdout.buffer)
        try:
            yield writer
        finally:
            writer.flush()
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    if compress:
        file_handle = gzip.open(path, 'wb')
    else:
        file_handle = open(path, 'wb')

    logging.info(f"Writing dump to {path}")
    with file_handle:
        yield SqlWriter(file_handle)
