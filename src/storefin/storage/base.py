#!/usr/bin/env python3
"""
File Store Mixin - Shared helpers for the file-backed stores.

Each user gets a directory under the store's base directory.
"""

import re
from datetime import datetime
from pathlib import Path

_USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.@-]+$")


class FileStoreMixin:
    """
    Mixin providing per-user directories and file metadata.

    Subclasses set ``base_dir`` before using the helpers.
    """

    base_dir: Path

    def _user_dir(self, user_id: str) -> Path:
        """
        Directory holding a user's files.

        Raises:
            ValueError: If user_id is empty or could escape the base directory
        """
        if not user_id or user_id in (".", "..") or not _USER_ID_PATTERN.match(user_id):
            raise ValueError(f"Invalid user id: {user_id!r}")
        return self.base_dir / user_id

    @staticmethod
    def _modified_at(path: Path) -> datetime | None:
        """Modification time of a file, None when it does not exist."""
        if not path.exists():
            return None
        return datetime.fromtimestamp(path.stat().st_mtime)

