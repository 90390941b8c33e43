"""Installer workflow helpers built on the file-tree engine."""

from bundlefs.installs.library import InstallLibrary

__all__ = ["InstallLibrary"]
