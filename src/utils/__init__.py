"""
PyMixTimeline Utilities Module

Utility functions and helpers:
- logger: Logging configuration
- time_format: Elapsed time and ruler label formatting
"""
from .logger import logger
from .time_format import format_time, ruler_label, ruler_labels

__all__ = ['logger', 'format_time', 'ruler_label', 'ruler_labels']
