"""
Timeline Normalizer

Resamples a pose sequence to a bounded frame budget so that long
recordings don't dominate comparison cost.
"""

from ..config import TARGET_FRAMES
from ..domain.pose import PoseSequence


def normalize_timeline(
    sequence: PoseSequence,
    target_frames: int = TARGET_FRAMES,
) -> PoseSequence:
    """
    Decimate a sequence down to `target_frames` frames.

    Sequences already within budget are returned unchanged (no padding,
    no interpolation). Longer sequences keep the frame at
    floor(i * len / target) for each output index i, so every output
    frame is one of the source frames.

    Args:
        sequence: Time-ordered frames
        target_frames: Maximum number of frames to keep

    Returns:
        The original sequence, or a new list of `target_frames` source frames
    """
    source_frames = len(sequence)
    if source_frames <= target_frames:
        return sequence

    return [
        sequence[(i * source_frames) // target_frames]
        for i in range(target_frames)
    ]
