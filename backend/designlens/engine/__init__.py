"""Design extraction engine."""

from designlens.engine.assembler import build_payload
from designlens.engine.extractor import extract_selection
from designlens.engine.pipeline import AnalysisPipeline

__all__ = [
    "AnalysisPipeline",
    "build_payload",
    "extract_selection",
]
