"""
Command comment parsing.

This package turns documentation comments into command and parameter
metadata: attribute blocks, parameter descriptions, the comment directive
scanner and the merge of parameter candidates.
"""

from cmdspec.parsing.attributes import (
    extract_attribute_block,
    parse_attributes,
    parse_func_ref,
    split_safe,
)
from cmdspec.parsing.comments import (
    CommentScanner,
    ParsedComment,
    ScanState,
    ScanWarning,
    scan_comment,
)
from cmdspec.parsing.merge import CandidateSource, merge_candidates, merge_parameter
from cmdspec.parsing.models import FuncRef, ParsedParam
from cmdspec.parsing.params import parse_param_details, sort_flags

__all__ = [
    "CandidateSource",
    "CommentScanner",
    "FuncRef",
    "ParsedComment",
    "ParsedParam",
    "ScanState",
    "ScanWarning",
    "extract_attribute_block",
    "merge_candidates",
    "merge_parameter",
    "parse_attributes",
    "parse_func_ref",
    "parse_param_details",
    "scan_comment",
    "sort_flags",
    "split_safe",
]
