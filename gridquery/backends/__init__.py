from __future__ import annotations

from .base import GridBackend
from .structured import ModelBackend, StructuredBackend, TableBackend
from .template import TemplateBackend

__all__ = [
    'GridBackend',
    'StructuredBackend',
    'ModelBackend',
    'TableBackend',
    'TemplateBackend',
]
