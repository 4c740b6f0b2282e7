"""CLI framework for clipwatch."""
from __future__ import annotations

from clipwatch.cli.app import ExitCode
from clipwatch.cli.app import app
from clipwatch.cli.app import run_app

__all__ = ["app", "run_app", "ExitCode"]
