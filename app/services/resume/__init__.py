"""
Resume builder package

- builder.py: per-session draft, AI preview generation and preview selection
- preview.py: deterministic local preview
- exporter.py: .docx export
"""

from .builder import ResumeBuilder
from .exporter import DocxExporter
from .preview import render_local_preview

__all__ = [
    'ResumeBuilder',
    'DocxExporter',
    'render_local_preview',
]
