"""Pipeline stages - Prompt, parse, normalize, validate, post-process, compare."""

from __future__ import annotations

from policyextract.pipeline.comparator import compare
from policyextract.pipeline.normalizer import normalize
from policyextract.pipeline.parser import parse
from policyextract.pipeline.postprocess import post_process
from policyextract.pipeline.prompt import build
from policyextract.pipeline.validator import validate


__all__ = [
    "build",
    "compare",
    "normalize",
    "parse",
    "post_process",
    "validate",
]
