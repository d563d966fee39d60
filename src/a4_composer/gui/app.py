"""
Entry point for the A4 Composer desktop app.
"""
import logging
import sys


def run():
    """
    Main entry point for the GUI application.
    """
    from PySide6.QtWidgets import QApplication
    from a4_composer.gui.main_window import MainWindow
    from a4_composer.gui.styles.theme import apply_theme

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("A4 Composer")
    app.setApplicationDisplayName("A4 Composer")
    app.setOrganizationName("A4 Composer")

    apply_theme(app)

    window = MainWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
