"""HR agent service: a conversational assistant over the employee directory."""

__version__ = "0.1.0"
