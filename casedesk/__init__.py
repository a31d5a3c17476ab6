"""CaseDesk: case management backend for an inspection business."""

__version__ = "0.1.0"
