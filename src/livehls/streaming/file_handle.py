"""
Reference-counted handle to segment or playlist storage.

The playlist core never opens, writes or deletes the storage behind a
handle. It only takes and drops references; whoever drops the last one
decides what happens to the file (optionally through ``on_release``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Union

from ..infra.exceptions import HandleReleasedError

PathLike = Union[str, Path]


class SharedFile:
    """Shared-ownership handle. A new handle starts with one reference owned by its creator."""

    __slots__ = ("path", "_refcount", "_on_release")

    def __init__(
        self,
        path: PathLike,
        on_release: Optional[Callable[["SharedFile"], None]] = None,
    ):
        self.path = Path(path)
        self._refcount = 1
        self._on_release = on_release

    @property
    def refcount(self) -> int:
        return self._refcount

    @property
    def released(self) -> bool:
        """True once the last reference has been dropped."""
        return self._refcount == 0

    def acquire(self) -> SharedFile:
        """Take an additional reference and return the handle for chaining."""
        if self._refcount == 0:
            raise HandleReleasedError(f"cannot acquire released handle {self.path}")
        self._refcount += 1
        return self

    def release(self) -> None:
        """Drop one reference. The ``on_release`` hook fires when the count reaches zero."""
        if self._refcount == 0:
            raise HandleReleasedError(f"handle {self.path} already released")
        self._refcount -= 1
        if self._refcount == 0 and self._on_release is not None:
            self._on_release(self)

    def __repr__(self) -> str:
        return f"SharedFile({str(self.path)!r}, refcount={self._refcount})"
