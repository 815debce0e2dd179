"""Full-corpus nearest-neighbour search."""
from wordspace.scan.corpus_scan import CorpusScan

__all__ = ["CorpusScan"]
