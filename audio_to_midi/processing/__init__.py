"""Processing layer - Note-level post-processing.

This layer turns per-frame estimates into notes:
- Melody segmentation (semitone-tolerant merging)
- Chord segmentation (fingerprint merging)
- Drum hits (one note per transient)
"""

from .segmentation import NoteSegmenter, SegmentationConfig

__all__ = [
    "NoteSegmenter",
    "SegmentationConfig",
]
