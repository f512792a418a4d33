"""podscaffold: interactive configurator for pod library templates."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("podscaffold")
except PackageNotFoundError:
    __version__ = "0.0.0"
