"""
Theme definitions for the A4 Composer GUI.
"""


class Colors:
    # Primary Colors
    PRIMARY_BLUE = "#0364B8"
    PRIMARY_BLUE_HOVER = "#0A2767"
    PRIMARY_BLUE_PRESSED = "#0A2767"

    # Backgrounds
    BACKGROUND = "#f5f5f5"
    SURFACE = "#ffffff"
    HOVER = "#f0f0f0"
    DISABLED_BG = "#e0e0e0"

    # Text
    TEXT_PRIMARY = "#1f1f1f"
    TEXT_SECONDARY = "#666666"
    TEXT_DISABLED = "#757575"
    TEXT_ON_PRIMARY = "#ffffff"

    # Borders & Dividers
    BORDER = "#e0e0e0"
    BORDER_FOCUS = "#2563eb"  # Selected template

    # Status
    ERROR = "#d32f2f"
    SUCCESS = "#388e3c"
    WARNING = "#f57c00"


class Fonts:
    UI_FONT = "-apple-system, 'SF Pro Text', 'Segoe UI', Roboto, Helvetica, Arial, sans-serif"
    MONO_FONT = "Consolas, Monaco, Menlo, 'Courier New', monospace"

    BODY = "13pt"
    CONSOLE = "11pt"

    WEIGHT_MEDIUM = "500"
    WEIGHT_BLACK = "900"


class Styles:
    BUTTON_PRIMARY = f"""
        QPushButton {{
            background-color: {Colors.PRIMARY_BLUE};
            color: {Colors.TEXT_ON_PRIMARY};
            border-radius: 6px;
            padding: 6px 14px;
            font-weight: {Fonts.WEIGHT_MEDIUM};
            border: none;
        }}
        QPushButton:hover {{
            background-color: {Colors.PRIMARY_BLUE_HOVER};
        }}
        QPushButton:pressed {{
            background-color: {Colors.PRIMARY_BLUE_PRESSED};
        }}
        QPushButton:disabled {{
            background-color: {Colors.DISABLED_BG};
            color: {Colors.TEXT_DISABLED};
        }}
    """

    BUTTON_SECONDARY = f"""
        QPushButton {{
            background-color: {Colors.SURFACE};
            color: {Colors.TEXT_PRIMARY};
            border: 1px solid {Colors.BORDER};
            border-radius: 6px;
            padding: 6px 14px;
            font-weight: {Fonts.WEIGHT_MEDIUM};
        }}
        QPushButton:hover {{
            background-color: {Colors.HOVER};
        }}
        QPushButton:disabled {{
            color: {Colors.TEXT_DISABLED};
        }}
    """

    TITLE = f"font-weight: {Fonts.WEIGHT_BLACK}; font-size: 16pt;"


GLOBAL_STYLESHEET = f"""
    * {{
        font-family: {Fonts.UI_FONT};
        font-size: {Fonts.BODY};
        color: {Colors.TEXT_PRIMARY};
    }}

    QMainWindow {{
        background-color: {Colors.BACKGROUND};
    }}

    QLabel {{
        background-color: transparent;
    }}

    QStatusBar {{
        background-color: {Colors.SURFACE};
        color: {Colors.TEXT_SECONDARY};
    }}

    QScrollArea {{
        background: {Colors.BACKGROUND};
        border: none;
    }}
"""


def apply_theme(app) -> None:
    """Apply the global stylesheet to the application."""
    app.setStyleSheet(GLOBAL_STYLESHEET)
