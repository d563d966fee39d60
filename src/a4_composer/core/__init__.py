"""
Core Package

Immutable models and the shared error hierarchy. Nothing in here knows
about Pillow, ReportLab, python-docx or Qt.
"""
