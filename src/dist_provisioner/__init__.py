"""dist-provisioner - Copy distribution config templates into place."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dist-provisioner")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
