from .core import Harness, Record, RunBaseline, SavedBaseline
from .perf import Perf, Summary, Histogram, Comparison
from .io import save_summary, load_summary, write_csv, write_manifest
from .report import format_summary

__all__ = [
    "Harness", "Record", "RunBaseline", "SavedBaseline",
    "Perf", "Summary", "Histogram", "Comparison",
    "save_summary", "load_summary", "write_csv", "write_manifest",
    "format_summary",
]
