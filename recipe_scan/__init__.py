"""
Batch recipe extraction from photographed pages.

Groups photos taken in quick succession, reads them with a generative AI
service, and turns each recipe into a structured, export-ready record.
"""

__version__ = "1.0.0"
__author__ = "Recipe Scan Team"
