"""Information about a file uploaded with a request."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FileInfo:
    """Where an uploaded file was stored, its type, encoding and size so far."""

    file_system_file_name: str = ""
    content_type: str = ""
    transfer_encoding: str = ""
    file_size: int = 0

    def grow_file_size(self, additional_file_size: int) -> None:
        """Add ``additional_file_size`` bytes to the recorded size."""
        if additional_file_size < 0:
            raise ValueError("file size can only grow")
        self.file_size += additional_file_size