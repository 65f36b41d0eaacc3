"""Frame extraction - slice a sample buffer into overlapping windows."""

from typing import Iterator

import numpy as np

from ..core import RawFrame


def count_frames(n_samples: int, frame_size: int, hop_size: int) -> int:
    """Number of full frames starting strictly before n_samples - frame_size."""
    if n_samples <= frame_size:
        return 0
    return (n_samples - frame_size - 1) // hop_size + 1


def iter_frames(
    samples: np.ndarray,
    sr: int,
    frame_size: int = 2048,
    hop_size: int = 512,
) -> Iterator[RawFrame]:
    """
    Yield analysis windows in time order.

    Args:
        samples: Mono audio array
        sr: Sample rate
        frame_size: Window length in samples
        hop_size: Samples between window starts

    Yields:
        RawFrame views into ``samples`` (not copies)
    """
    for i in range(count_frames(len(samples), frame_size, hop_size)):
        start = i * hop_size
        yield RawFrame(samples[start:start + frame_size], start / sr)
