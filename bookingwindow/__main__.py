"""
Entry point for ``python -m bookingwindow``.
"""

from .cli.app import app

if __name__ == "__main__":
    app()
