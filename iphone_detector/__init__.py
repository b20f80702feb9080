"""iPhone Detector - identifies iPhone models from live display metrics."""

try:
    from iphone_detector._version import version as __version__
except ImportError:
    __version__ = "0.0.0.dev0"
