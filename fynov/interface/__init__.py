"""Mini README: Interactive interfaces for FyNov.

Exports the FastAPI application factory that serves the browser pages and the
form controller those pages post to.
"""

from .forms import FormController, FormValidationError
from .web_app import create_application

__all__ = ["FormController", "FormValidationError", "create_application"]
