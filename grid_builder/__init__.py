"""Grid Builder App"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("grid-builder")
except PackageNotFoundError:
    __version__ = "dev"
