"""Output rendering for evaluation results."""

from .stdout import StdoutReporter
from .writer import build_report, render_json, write_report

__all__ = ["StdoutReporter", "build_report", "render_json", "write_report"]
