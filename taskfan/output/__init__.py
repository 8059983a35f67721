from .types import OutputError
from .writer import STATUS_LABELS, render_results, write_results

__all__ = ["render_results", "write_results", "STATUS_LABELS", "OutputError"]
