"""
Command Line Interface for PyFastResample

Command line utilities for resizing images without writing Python scripts.

Available Commands:
- image_resize (pfr-resize): Filter-based resize of an image file
- image_reduce (pfr-reduce): Fast box-average reduction of an image file

Author: B.G.
"""

_CLI_SUBMODULES = {
    "image_resize": (".rastermanip_commands", "image_resize"),
    "image_reduce": (".rastermanip_commands", "image_reduce"),
}

__all__ = list(_CLI_SUBMODULES.keys())


def __getattr__(name):
    info = _CLI_SUBMODULES.get(name)
    if info is None:
        raise AttributeError(name)
    pkg, attr = info
    import importlib
    mod = importlib.import_module(pkg, __package__)
    obj = getattr(mod, attr)
    globals()[name] = obj
    return obj
