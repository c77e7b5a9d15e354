"""Entry-point for the Stack-chan dialogue client."""
from __future__ import annotations

from cli.commands import app


if __name__ == "__main__":
    app()
