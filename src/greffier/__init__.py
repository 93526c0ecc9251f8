"""
Greffier - identity reconciliation and wallet binding service.
"""

__version__ = "0.1.0"
