"""
PySide6 desktop app for A4 Composer.

Entry point: a4_composer.gui.app.run()
"""
