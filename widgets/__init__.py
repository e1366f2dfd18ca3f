"""Widgets for animated numbers."""

from .animated_number_label import AnimatedNumberLabel, default_render

__all__ = [
    'AnimatedNumberLabel',
    'default_render',
]
