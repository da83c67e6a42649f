"""
CleanupRegistry - Files and directories a tutorial run promises to remove.

Section bodies register a path before creating it; everything registered is
removed once when the run ends. Removal is best-effort and never raises.
"""

import logging
import shutil
import signal
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


class CleanupRegistry:
    """
    Set of paths and glob patterns to delete at exit.

    Relative paths are anchored at base_dir. Registering the same path twice
    is a no-op, and a second cleanup() finds nothing left to do.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir else Path(".")
        self._paths: set[Path] = set()
        self._patterns: set[str] = set()

    def _anchor(self, path: str | Path) -> Path:
        path = Path(path)
        if not path.is_absolute():
            path = self.base_dir / path
        return path.absolute()

    def register(self, path: str | Path) -> Path:
        """Register a path for removal and return its anchored form."""
        anchored = self._anchor(path)
        self._paths.add(anchored)
        return anchored

    def register_glob(self, pattern: str):
        """Register a glob pattern (relative to base_dir) expanded at cleanup time."""
        self._patterns.add(pattern)

    @property
    def paths(self) -> frozenset[Path]:
        return frozenset(self._paths)

    def __contains__(self, path) -> bool:
        return self._anchor(path) in self._paths

    def __len__(self) -> int:
        return len(self._paths) + len(self._patterns)

    def cleanup(self) -> int:
        """
        Remove everything registered.

        Returns:
            Number of paths actually removed
        """
        targets = set(self._paths)
        for pattern in self._patterns:
            targets.update(p.absolute() for p in self.base_dir.glob(pattern))
        self._paths.clear()
        self._patterns.clear()

        removed = 0
        # Deepest paths first so files go before their directories
        for path in sorted(targets, key=lambda p: len(p.parts), reverse=True):
            if _remove(path):
                removed += 1
        if removed:
            logger.info(f"Cleanup removed {removed} path(s)")
        return removed


def _remove(path: Path) -> bool:
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.debug(f"Could not remove {path}: {e}")
        return False


# -----------------------------------------------------------------------------
# Termination signals
# -----------------------------------------------------------------------------

def _exit_on_signal(signum, frame):
    raise SystemExit(128 + signum)


@contextmanager
def exit_on_signals() -> Iterator[None]:
    """
    Turn SIGTERM / SIGHUP into SystemExit for the duration of the block,
    so that enclosing finally clauses (and cleanup) still run.
    """
    names = ("SIGTERM", "SIGHUP")
    previous = {}
    for name in names:
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        try:
            previous[signum] = signal.signal(signum, _exit_on_signal)
        except ValueError:
            # Not the main thread; leave handlers alone
            logger.debug(f"Cannot install handler for {name} outside the main thread")
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
