"""Filesystem existence checks."""

import asyncio
import os


class StatError(Exception):
    """Unexpected filesystem error while checking a path."""

    def __init__(self, path: str, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Failed to stat {path}: {error}")


async def path_exists(path: str) -> bool:
    """
    Check whether a file or directory exists.

    Missing and malformed paths (e.g. embedded NUL) return False; any
    other OS error raises StatError.
    """
    if not path:
        return False

    try:
        await asyncio.to_thread(os.stat, path)
    except (FileNotFoundError, NotADirectoryError, ValueError):
        return False
    except OSError as e:
        raise StatError(path, e) from e

    return True
