"""PySide6 front-end for Sketchboard."""
