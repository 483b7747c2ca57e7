"""
Clinic operations engine: directories, appointment scheduling, recommendation and billing.
"""

from .cli import app


def main() -> None:
    # Delegate to Typer app so `uv run meditrack ...` works.
    app()
