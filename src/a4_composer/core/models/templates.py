"""
Module: templates

Purpose:
    Background template model and the default template gallery.
    Selecting a template is plain assignment; it never affects
    pagination or the content region.

Key Classes:
    - Template: Named background image reference

Key Constants:
    - DEFAULT_TEMPLATES: Gallery shown in the GUI

Used By:
    - composer.controller: Current template
    - composer.output.rasterizer: Page background
    - gui.widgets.template_gallery: Thumbnails
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Template:
    """
    Background template.

    Attributes:
        name: Display name
        url: Path to the background image (absolute, or relative to the
            working directory)
    """

    name: str
    url: str

    @property
    def path(self) -> Path:
        return Path(self.url)


DEFAULT_TEMPLATES: Tuple[Template, ...] = tuple(
    Template(name=f"Template {n}", url=f"templates/template{n}.png")
    for n in range(1, 6)
)
