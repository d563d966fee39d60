"""
Template gallery: a horizontal strip of checkable thumbnails.
"""
from __future__ import annotations

from typing import Dict, Optional, Sequence

from PySide6.QtCore import QSize, Qt, Signal
from PySide6.QtGui import QIcon, QPixmap
from PySide6.QtWidgets import QButtonGroup, QHBoxLayout, QToolButton, QWidget

from a4_composer.core.models import Template
from a4_composer.gui.styles.theme import Colors

THUMBNAIL_SIZE = QSize(80, 113)


class TemplateGallery(QWidget):
    """Emits templateSelected(Template) when a thumbnail is clicked."""

    templateSelected = Signal(object)

    def __init__(self, templates: Sequence[Template], parent=None):
        super().__init__(parent)
        self._buttons: Dict[Template, QToolButton] = {}

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self._group = QButtonGroup(self)
        self._group.setExclusive(True)

        for template in templates:
            button = self._make_button(template)
            self._group.addButton(button)
            self._buttons[template] = button
            layout.addWidget(button)
        layout.addStretch()

    @property
    def selected(self) -> Optional[Template]:
        for template, button in self._buttons.items():
            if button.isChecked():
                return template
        return None

    def clear_selection(self) -> None:
        # An exclusive group refuses to uncheck its last checked button
        self._group.setExclusive(False)
        for button in self._buttons.values():
            button.setChecked(False)
        self._group.setExclusive(True)

    def _make_button(self, template: Template) -> QToolButton:
        button = QToolButton(self)
        button.setCheckable(True)
        button.setToolTip(template.name)
        button.setIconSize(THUMBNAIL_SIZE)
        button.setFixedSize(THUMBNAIL_SIZE + QSize(8, 8))

        pixmap = QPixmap(str(template.path))
        if pixmap.isNull():
            button.setText(template.name)
            button.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextOnly)
        else:
            button.setIcon(QIcon(pixmap.scaled(
                THUMBNAIL_SIZE,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )))

        button.setStyleSheet(f"""
            QToolButton {{
                background-color: {Colors.SURFACE};
                border: 2px solid {Colors.BORDER};
                border-radius: 4px;
            }}
            QToolButton:checked {{
                border: 2px solid {Colors.BORDER_FOCUS};
            }}
        """)
        button.clicked.connect(lambda checked=False, t=template: self.templateSelected.emit(t))
        return button
