"""Line-oriented readers over files and in-memory text."""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Literal, TextIO


@dataclass(frozen=True)
class Source:
    """Where ssh_config text comes from.

    A ``file`` source holds a filesystem path, a ``string`` source holds the
    configuration text itself.
    """

    kind: Literal["file", "string"]
    value: str

    @classmethod
    def file(cls, path: str | Path) -> "Source":
        return cls(kind="file", value=str(path))

    @classmethod
    def string(cls, text: str) -> "Source":
        return cls(kind="string", value=text)

    @property
    def directory(self) -> Path:
        """Directory that relative Include patterns are resolved against."""
        if self.kind == "file":
            return Path(self.value).expanduser().parent
        return Path.cwd()

    def __str__(self) -> str:
        if self.kind == "file":
            return self.value
        return "<string>"


class SourceReader:
    """Reads a Source line by line. ``close`` may be called any number of times."""

    def __init__(self, source: Source, stream: TextIO | None):
        self.source = source
        self._stream = stream

    @classmethod
    def open(cls, source: Source) -> "SourceReader":
        """Open a source. Raises OSError when a file source is not readable."""
        if source.kind == "string":
            return cls(source, io.StringIO(source.value))

        path = Path(source.value).expanduser()
        if path.is_dir():
            raise IsADirectoryError(f"SSH config path is a directory: {path}")
        return cls(source, open(path, encoding="utf-8", errors="replace"))

    def read_line(self) -> str | None:
        """Return the next line without its line terminator, or None at end of input."""
        if self._stream is None:
            return None
        line = self._stream.readline()
        if line == "":
            return None
        return line.rstrip("\r\n")

    def __iter__(self) -> Iterator[str]:
        while (line := self.read_line()) is not None:
            yield line

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __enter__(self) -> "SourceReader":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
