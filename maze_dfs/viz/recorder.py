import logging
import os
from datetime import datetime

import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)


class VideoRecorder:
    """Writes pygame frames to an MP4 file. Inactive recorders ignore every call."""

    def __init__(self, active=False, output_file=None, fps=30, prefix="dfs_solve"):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not self.output_file:
            self.output_file = default_output_path(prefix)

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        size = surface.get_size()
        if self.writer is None:
            self.frame_size = size
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
            logger.info(f"Recording started: {self.output_file}")
        elif size != self.frame_size:
            # Window was resized; the codec needs a fixed frame size
            surface = pygame.transform.scale(surface, self.frame_size)

        # surfarray is (w, h, RGB), OpenCV wants (h, w, BGR)
        rgb = np.ascontiguousarray(np.swapaxes(pygame.surfarray.array3d(surface), 0, 1))
        self.writer.write(cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None


def default_output_path(prefix: str) -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    fname = f"{prefix}_{ts}.mp4"
    os.makedirs("recordings", exist_ok=True)
    return os.path.join("recordings", fname)
