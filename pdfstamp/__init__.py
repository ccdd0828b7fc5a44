"""
pdfstamp: place text labels on PDF pages and burn them into a new PDF.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pdfstamp")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"
