"""Corpus transformation: personas, threads, labels and message assembly."""

from .labels import FolderRule, LabelInferencer, LabelRules
from .personas import DEFAULT_ROSTER, DEFAULT_SERVICE_ADDRESSES, PersonaAssigner
from .threads import ThreadResolver, normalize_subject
from .transformer import CorpusTransformer, compute_time_shift, generate_snippet

__all__ = [
    "DEFAULT_ROSTER",
    "DEFAULT_SERVICE_ADDRESSES",
    "CorpusTransformer",
    "FolderRule",
    "LabelInferencer",
    "LabelRules",
    "PersonaAssigner",
    "ThreadResolver",
    "compute_time_shift",
    "generate_snippet",
    "normalize_subject",
]
