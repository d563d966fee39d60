"""
Module: composer.loading

Purpose:
    Document loading: binary .docx file to an ordered Document of blocks.

Key Classes:
    - DocumentLoader: Loader capability protocol
    - DocxDocumentLoader: python-docx implementation
"""

from .loader import DocumentLoader, DocxDocumentLoader

__all__ = [
    "DocumentLoader",
    "DocxDocumentLoader",
]
