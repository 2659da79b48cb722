"""Worker Scoring Service: binary job/worker qualification scoring over HTTP."""

__version__ = "1.0.0"
