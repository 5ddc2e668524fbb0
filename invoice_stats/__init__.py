"""
Invoice Stats
Periodic financial reporting over invoice and quotation records.
"""

__version__ = "1.0.0"
