"""Report rendering for truss."""

from report.render import render_human, render_json

__all__ = ["render_human", "render_json"]
