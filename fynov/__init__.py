"""Mini README: Core package initializer for the FyNov finance tracker.

FyNov records income, expenses and savings goals in a local key-value store
and renders monthly comparisons, a dashboard and charts from them. Only the
logging helper is re-exported here so importing the package stays cheap.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
