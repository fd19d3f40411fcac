from importlib.metadata import version, PackageNotFoundError


try:
    # Get version from metadata
    __version__ = version("anon-engine")
except PackageNotFoundError:
    # package is not installed, e.g. running from a source checkout
    __version__ = "1.0.0"
