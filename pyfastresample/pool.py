"""
Temporary taichi field pool for PyFastResample.

Resize and reduce calls need short-lived taichi fields (source pixels,
contribution tables, the intermediate linear buffer, the destination). Taichi
field allocation is comparatively expensive, so released fields are kept and
handed back to later calls asking for the same dtype and shape.

A field is owned by a single caller between ``get_temp_field`` and
``release``; the pool never hands out a field that is in use. The pool
bookkeeping is guarded by a lock, so several threads may acquire and release
fields concurrently.

Usage:
    tmp = pool.get_temp_field(ti.f32, (nx * ny,))
    tmp.field.from_numpy(data)
    ...
    tmp.release()

Author: B.G.
"""

import threading

import taichi as ti
from taichi.lang import impl


class TempField:
    """A pooled taichi field, returned to the pool by ``release``."""

    def __init__(self, owner, key, field, runtime):
        self._owner = owner
        self._runtime = runtime
        self.key = key
        self.field = field
        self.in_use = True

    def release(self):
        """Give the field back to the pool. Releasing twice is a no-op."""
        with self._owner._lock:
            if not self.in_use:
                return
            self.in_use = False
            # Fields from a runtime replaced by a later ti.init() are dropped
            if self._runtime is self._owner._runtime:
                self._owner._free.setdefault(self.key, []).append(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False


class FieldPool:
    """Keeps released taichi fields keyed by (dtype, shape)."""

    def __init__(self):
        self._free = {}
        self._runtime = None
        self._lock = threading.Lock()

    def get_temp_field(self, dtype, shape):
        runtime = impl.get_runtime()
        shape = tuple(int(s) for s in shape)
        key = (dtype, shape)
        with self._lock:
            if runtime is not self._runtime:
                self._free.clear()
                self._runtime = runtime
            free = self._free.get(key)
            if free:
                tmp = free.pop()
                tmp.in_use = True
                return tmp
        return TempField(self, key, ti.field(dtype=dtype, shape=shape), runtime)

    def clear(self):
        """Forget every cached field."""
        with self._lock:
            self._free.clear()

    def n_free(self):
        return sum(len(v) for v in self._free.values())


taipool = FieldPool()


def get_temp_field(dtype, shape):
    """Acquire a temporary field of ``dtype`` and ``shape`` from the global pool."""
    return taipool.get_temp_field(dtype, shape)


def clear():
    taipool.clear()


__all__ = ["TempField", "FieldPool", "taipool", "get_temp_field", "clear"]
