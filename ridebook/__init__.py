"""Ridebook - booking and availability backend for a ground-transportation business."""

__version__ = "0.1.0"
