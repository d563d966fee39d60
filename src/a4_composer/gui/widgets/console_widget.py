"""
Console widget for displaying logs.
"""
from datetime import datetime
from typing import Set

from PySide6.QtCore import Slot
from PySide6.QtGui import QColor, QFont, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import QApplication, QGroupBox, QMenu, QPlainTextEdit, QSizePolicy, QVBoxLayout

from a4_composer.gui.styles.theme import Colors, Fonts

# Levels hidden from the console ("info", "warning", "error", "success")
CONSOLE_SUPPRESSED_LEVELS: Set[str] = set()

MAX_LINES = 1000


class ConsoleWidget(QGroupBox):
    def __init__(self, parent=None):
        super().__init__("Console Log", parent)

        self.suppressed_levels: Set[str] = CONSOLE_SUPPRESSED_LEVELS.copy()

        self.setMinimumHeight(40)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.text_edit = QPlainTextEdit()
        self.text_edit.setReadOnly(True)
        self.text_edit.setLineWrapMode(QPlainTextEdit.LineWrapMode.WidgetWidth)

        font = QFont(Fonts.MONO_FONT.split(',')[0])
        font.setPointSize(int(Fonts.CONSOLE.replace("pt", "")))
        self.text_edit.setFont(font)

        self.setStyleSheet(f"""
            QGroupBox {{
                background-color: {Colors.SURFACE};
                border-top: 1px solid {Colors.BORDER};
                border-left: none;
                border-right: none;
                border-bottom: none;
                margin-top: 24px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 8px;
                padding: 0 4px;
                background-color: {Colors.BACKGROUND};
            }}
        """)
        self.text_edit.setStyleSheet(f"""
            QPlainTextEdit {{
                border: none;
                background-color: {Colors.SURFACE};
            }}
        """)
        layout.addWidget(self.text_edit)

        self.format_info = QTextCharFormat()
        self.format_info.setForeground(QColor(Colors.TEXT_PRIMARY))

        self.format_error = QTextCharFormat()
        self.format_error.setForeground(QColor(Colors.ERROR))

        self.format_warning = QTextCharFormat()
        self.format_warning.setForeground(QColor(Colors.WARNING))

        self.format_success = QTextCharFormat()
        self.format_success.setForeground(QColor(Colors.SUCCESS))

    @Slot(str, str)
    def append_log(self, level: str, message: str):
        """Appends a log message with color coding based on level."""
        if level.lower() in self.suppressed_levels:
            return

        fmt = self.format_info
        if level.lower() in ("error", "critical"):
            fmt = self.format_error
        elif level.lower() in ("warning", "warn"):
            fmt = self.format_warning
        elif level.lower() == "success":
            fmt = self.format_success

        cursor = self.text_edit.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)
        timestamp = datetime.now().strftime("%H:%M:%S")
        cursor.insertText(f"[{timestamp}] [{level.upper()}] {message}\n", fmt)

        self.text_edit.setTextCursor(cursor)
        self.text_edit.ensureCursorVisible()

        doc = self.text_edit.document()
        if doc.blockCount() > MAX_LINES:
            cursor = QTextCursor(doc)
            cursor.movePosition(QTextCursor.MoveOperation.Start)
            cursor.movePosition(
                QTextCursor.MoveOperation.Down,
                QTextCursor.MoveMode.KeepAnchor,
                doc.blockCount() - MAX_LINES,
            )
            cursor.removeSelectedText()

    def contextMenuEvent(self, event):
        menu = QMenu(self)
        copy_all_action = menu.addAction("Copy All")
        menu.addSeparator()
        clear_action = menu.addAction("Clear")

        action = menu.exec(event.globalPos())

        if action == copy_all_action:
            QApplication.clipboard().setText(self.text_edit.toPlainText())
        elif action == clear_action:
            self.clear()

    def clear(self):
        self.text_edit.clear()

    def text(self) -> str:
        return self.text_edit.toPlainText()
