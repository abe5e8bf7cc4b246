"""Edge request gatekeeper for a static APT repository.

Exposes the distribution version as ``__version__`` when installed.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("aptgate")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
