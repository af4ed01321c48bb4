from bill_text_core.aggregate import aggregate_versions
from bill_text_core.archive import ArchiveOptions, run_archive
from bill_text_core.builder import build_version
from bill_text_core.citations import CitationServiceClient, dedupe_citations
from bill_text_core.config import Settings, load_settings
from bill_text_core.metadata import MetadataResolver
from bill_text_core.qdrant import QdrantClient
from bill_text_core.report import RunReport, RunReporter
from bill_text_core.sinks import DualSinkWriter
from bill_text_core.text import clean_text

__all__ = [
    "__version__",
    "ArchiveOptions",
    "CitationServiceClient",
    "DualSinkWriter",
    "MetadataResolver",
    "QdrantClient",
    "RunReport",
    "RunReporter",
    "Settings",
    "aggregate_versions",
    "build_version",
    "clean_text",
    "dedupe_citations",
    "load_settings",
    "run_archive",
]

__version__ = "0.1.0"
