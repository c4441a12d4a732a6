"""Optional dependency checks.

Operations that delegate to a numerics provider call :func:`require_package`
before doing any work, so a missing provider surfaces as a single
:class:`MissingDependencyError` rather than a failure halfway through a
computation.
"""

import importlib
import logging
from importlib.util import find_spec
from types import ModuleType

logger = logging.getLogger(__name__)


class MissingDependencyError(ImportError):
    """A package needed by the requested operation is not installed."""

    def __init__(self, package: str, install: str = None):
        self.package = package
        self.install = install or package.split(".")[0]
        super().__init__(
            f"{package} is required for this operation. "
            f"Install with: pip install {self.install}",
            name=package,
        )


def _is_available(package: str) -> bool:
    try:
        return find_spec(package) is not None
    except ModuleNotFoundError:
        # find_spec raises for ``a.b`` when ``a`` itself is missing
        return False


def require_package(package: str, install: str = None) -> ModuleType:
    """
    Import ``package`` or fail with :class:`MissingDependencyError`.

    Parameters
    ----------
    package : str
        Dotted module name, e.g. ``"scipy.stats"``.
    install : str, optional
        Distribution name to suggest in the error message. Defaults to the
        top-level package of ``package``.

    Returns
    -------
    module : ModuleType
        The imported module.

    Raises
    ------
    MissingDependencyError
        If the module cannot be found.
    """
    if not _is_available(package):
        raise MissingDependencyError(package, install)
    module = importlib.import_module(package)
    logger.debug("Resolved numerics provider %s", module.__name__)
    return module
