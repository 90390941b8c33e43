"""bundlefs - place downloaded bundles on disk and retire obsolete installs."""

__version__ = "0.1.0"
