# ditherstag - Kernel cache
"""
Memoization of generated convolution kernels.

A :class:`KernelCache` is created by the host, typically once per process,
and passed to :meth:`~ditherstag.gray_image.GrayImage.gaussian_kernel` and
:meth:`~ditherstag.gray_image.GrayImage.gaussian_blur`. Tests and
independent pipelines can use isolated instances.

Entries are never evicted. The key space is bounded by the number of
distinct blur configurations a host uses.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from .image import Image

logger = logging.getLogger(__name__)


class KernelKey(NamedTuple):
    """Parameters identifying a Gaussian kernel"""

    std_dev: float
    width: int
    height: int


class KernelCache:
    """Thread-safe store of kernels keyed by :class:`KernelKey`.

    Stored kernels are private copies and are never handed out directly:
    :meth:`get` returns a fresh copy on every hit, so callers may mutate
    what they receive.
    """

    def __init__(self):
        self._entries: dict[KernelKey, Image] = {}
        self._lock = threading.Lock()
        self.hits = 0
        "Number of lookups which found a kernel"
        self.misses = 0
        "Number of lookups which did not find a kernel"

    def get(self, key: KernelKey) -> Image | None:
        """
        Looks up a kernel.

        :param key: The kernel parameters
        :return: An independent copy of the kernel or None if unknown
        """
        with self._lock:
            kernel = self._entries.get(key)
            if kernel is None:
                self.misses += 1
            else:
                self.hits += 1
        if kernel is None:
            logger.debug("Kernel cache miss for %s", key)
            return None
        logger.debug("Kernel cache hit for %s", key)
        # stored entries are never mutated
        return kernel.copy()

    def put(self, key: KernelKey, kernel: Image) -> bool:
        """
        Stores a copy of a kernel unless the key is already present.

        :param key: The kernel parameters
        :param kernel: The kernel
        :return: True if the kernel was stored
        """
        stored = kernel.copy()
        with self._lock:
            if key in self._entries:
                return False
            self._entries[key] = stored
        return True

    def clear(self) -> None:
        """Removes all entries and resets the statistics"""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def keys(self) -> list[KernelKey]:
        """Returns a snapshot of the cached keys"""
        with self._lock:
            return list(self._entries)

    def __contains__(self, key: KernelKey) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __repr__(self):
        return f"KernelCache(entries={len(self)}, hits={self.hits}, misses={self.misses})"


__all__ = ["KernelCache", "KernelKey"]
