"""
                Tiffin Ordering API

In-memory food-ordering backend: customer ordering, menu browsing,
delivery-partner workflow, admin oversight and mock payments.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
