"""
File Handler - append-only log file writer

Appends encoded records to a single file. Missing parent directories are
created on construction and every write is flushed before the lock is
released, so concurrent emitters never interleave partial lines.

Usage:
    from fieldlog.file_handler import FileHandler

    with FileHandler("/var/log/app/app.log") as handler:
        handler.write('{"level": "info", "message": "Started"}\\n')
"""

import os
from pathlib import Path
from threading import Lock


class FileHandler:
    """
    Thread-safe append-only file writer.

    The file is opened lazily on first write and reopened after close().
    """

    def __init__(self, filepath: str, encoding: str = "utf-8"):
        """
        Args:
            filepath: Path to log file
            encoding: File encoding (default: utf-8)
        """
        self.filepath = Path(filepath)
        self.encoding = encoding
        self._file = None
        self._lock = Lock()
        self._ensure_directory()

    def _ensure_directory(self):
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def write(self, content: str):
        """
        Append content to the file.

        Args:
            content: Content to write (should include newline if needed)
        """
        with self._lock:
            if self._file is None or self._file.closed:
                self._file = open(self.filepath, "a", encoding=self.encoding)

            self._file.write(content)
            self._file.flush()
            os.fsync(self._file.fileno())

    def flush(self):
        with self._lock:
            if self._file and not self._file.closed:
                self._file.flush()
                os.fsync(self._file.fileno())

    def close(self):
        """Close file handle. Safe to call more than once."""
        with self._lock:
            if self._file and not self._file.closed:
                self._file.flush()
                self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
