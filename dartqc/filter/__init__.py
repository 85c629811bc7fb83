"""
dartqc.filter removes loci failing a quality threshold.
"""
from ._filter import by_metric, rdepth, repeatability
from ._threshold import keep_mask

__all__ = ["by_metric", "rdepth", "repeatability", "keep_mask"]
