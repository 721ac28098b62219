"""Reading delimiter-separated metadata files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class ImageRepresentation:
    """Path of an image together with the value it represents."""

    path: str
    value: str


class CSVReader:
    """Reads a file line by line, splitting each line on one character."""

    def __init__(self, path: str | Path, splitter: str) -> None:
        self.path = Path(path)
        self.splitter = splitter
        self.contents: list[list[str]] = []
        self._consumed = False

    def read_contents(self) -> None:
        """Append the split lines of the file to ``contents``.

        The file is read once; a missing or unreadable file leaves the
        contents untouched.
        """
        if self._consumed:
            return
        try:
            with open(self.path, encoding="utf-8", newline="") as handle:
                text = handle.read()
        except OSError:
            return
        finally:
            self._consumed = True
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        self.contents.extend(self.split(line, self.splitter) for line in lines)

    @staticmethod
    def split(text: str, splitter: str) -> list[str]:
        """Split on ``splitter``; a trailing empty field is dropped."""
        fields = text.split(splitter)
        if fields[-1] == "":
            fields.pop()
        return fields