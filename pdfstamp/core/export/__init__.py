"""
Background export for the GUI. Imports PyQt5, so it is not re-exported from
``pdfstamp.core``.
"""
