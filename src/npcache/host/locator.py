"""
Locate and load the cache engine module bundled with the host npm CLI.

The engine is looked up only in directories that belong to the npm
installation (plus an explicit override), never on the interpreter's own
import path, so an unrelated package of the same name cannot be picked up.
"""
from __future__ import annotations

import importlib.machinery
import importlib.util
import logging
import shutil
import sys
from pathlib import Path
from types import ModuleType
from typing import List, Optional

from ..settings import Settings

__all__ = ["npm_root", "engine_search_path", "locate_engine"]

logger = logging.getLogger(__name__)


def npm_root(settings: Settings) -> Optional[Path]:
    """
    Installation root of the host npm CLI, or None when npm is not found.

    Both npm_execpath and the `npm` launcher on PATH live in `<root>/bin/`
    once symlinks are resolved.
    """
    if settings.npm_execpath:
        entry = Path(settings.npm_execpath)
    else:
        found = shutil.which(settings.npm_command)
        if found is None:
            return None
        entry = Path(found)

    if not entry.exists():
        return None
    return entry.resolve().parent.parent


def _forget_engine(name: str) -> None:
    """Drop a previously loaded engine and its submodules from sys.modules."""
    for loaded in [key for key in sys.modules if key == name or key.startswith(f"{name}.")]:
        del sys.modules[loaded]


def engine_search_path(settings: Settings) -> List[str]:
    """Directories searched for the engine module, in priority order."""
    search: List[str] = []
    if settings.engine_path:
        search.append(settings.engine_path)

    root = npm_root(settings)
    if root is not None:
        search.append(str(root / "node_modules"))
    return search


async def locate_engine(settings: Settings, name: str) -> ModuleType:
    """
    Import the engine module `name` from the npm installation.

    Raises:
        ModuleNotFoundError: If no search directory provides the module
    """
    search = engine_search_path(settings)
    logger.debug(f"Looking for engine module {name!r} in {search}")

    # npm may have been reinstalled since the directory listings were cached
    importlib.invalidate_caches()
    spec = importlib.machinery.PathFinder.find_spec(name, search) if search else None
    if spec is None or spec.loader is None:
        raise ModuleNotFoundError(f"No module named {name!r}", name=name)

    _forget_engine(name)
    module = importlib.util.module_from_spec(spec)
    # Package engines import their own submodules relative to this entry
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        _forget_engine(name)
        raise
    logger.debug(f"Loaded engine module {name!r} from {spec.origin}")
    return module
