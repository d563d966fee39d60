"""Top-level package for A4 Composer.

Provides subpackages:
- a4_composer.core – immutable models and the error hierarchy
- a4_composer.composer – loading, pagination, geometry and PDF export
- a4_composer.gui – PySide6 desktop app
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            for line in pyproject.read_text().splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.1"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("a4-composer")
    except Exception:
        return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 A4 Composer contributors"
__all__: list[str] = ["__version__"]
