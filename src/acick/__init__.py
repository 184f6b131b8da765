"""Command line companion for AtCoder."""

__version__ = "0.2.0"

PKG_NAME = "acick"
PKG_REPOSITORY = "https://github.com/gky360/acick"
USER_AGENT = f"{PKG_NAME}-{__version__} ({PKG_REPOSITORY})"

__all__ = ["PKG_NAME", "PKG_REPOSITORY", "USER_AGENT", "__version__"]
