import base64
import io
import json
import logging
import os
import re
import subprocess
import tempfile
from contextlib import contextmanager
from typing import Optional

from PIL import Image, UnidentifiedImageError

import config

logger = logging.getLogger(__name__)

FALLBACK_THUMBNAIL = "https://images.unsplash.com/photo-1492691527719-9d1e07e534b4?w=800&q=80"
FALLBACK_DURATION = "0:00"
THUMBNAIL_POSITION = 0.25
THUMBNAIL_QUALITY = 80

# Everything that can go wrong while probing or decoding a local video
EXTRACTION_ERRORS = (OSError, ValueError, KeyError, subprocess.SubprocessError, UnidentifiedImageError)


def to_data_url(data: bytes, content_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def format_duration(seconds: float) -> str:
    """Render a duration as ``m:ss``."""
    total = int(seconds)
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


def sanitize_title(filename: str) -> str:
    """Turn ``my_wedding_film.mp4`` into ``my wedding film``."""
    return re.sub(r"\.[^/.]+$", "", filename).replace("_", " ")


class VideoProbe:
    """Reads duration and still frames from local video files via ffprobe/ffmpeg."""

    def __init__(self, ffmpeg_path: str = config.FFMPEG_PATH, ffprobe_path: str = config.FFPROBE_PATH):
        self.ffmpeg = ffmpeg_path
        self.ffprobe = ffprobe_path

    def duration(self, input_path: str) -> float:
        cmd = [
            self.ffprobe, '-v', 'quiet',
            '-print_format', 'json',
            '-show_format',
            input_path,
        ]
        result = subprocess.run(cmd, capture_output=True, text=True, check=True)
        data = json.loads(result.stdout)
        return float(data['format']['duration'])

    def frame_at(self, input_path: str, seconds: float) -> bytes:
        """Grab one frame as PNG bytes."""
        cmd = [
            self.ffmpeg, '-v', 'quiet',
            '-ss', f"{seconds:.3f}",
            '-i', input_path,
            '-frames:v', '1',
            '-f', 'image2pipe',
            '-vcodec', 'png',
            'pipe:1',
        ]
        result = subprocess.run(cmd, capture_output=True, check=True)
        if not result.stdout:
            raise ValueError("ffmpeg returned no frame")
        return result.stdout


@contextmanager
def spooled_video(data: bytes, filename: str):
    """Write in-memory video bytes to a temp file the probe tools can open."""
    suffix = os.path.splitext(filename)[1] or ".mp4"
    fd, path = tempfile.mkstemp(suffix=suffix)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        yield path
    finally:
        os.remove(path)


def probe_duration(probe: VideoProbe, path: str) -> Optional[float]:
    """Length in seconds, or None when the file can't be probed."""
    try:
        return probe.duration(path)
    except EXTRACTION_ERRORS as e:
        logger.warning("Could not read duration of %s: %s", path, e)
        return None


def extract_duration(probe: VideoProbe, path: str) -> str:
    seconds = probe_duration(probe, path)
    if seconds is None:
        return FALLBACK_DURATION
    return format_duration(seconds)


def extract_thumbnail(probe: VideoProbe, path: str, seconds: Optional[float] = None) -> str:
    """JPEG still at a quarter of the video's length, or the stock placeholder.

    Pass ``seconds`` when the length is already known to skip probing again.
    """
    try:
        if seconds is None:
            seconds = probe.duration(path)
        frame = Image.open(io.BytesIO(probe.frame_at(path, seconds * THUMBNAIL_POSITION)))
        buf = io.BytesIO()
        frame.convert("RGB").save(buf, format="JPEG", quality=THUMBNAIL_QUALITY)
    except EXTRACTION_ERRORS as e:
        logger.warning("Could not extract thumbnail from %s: %s", path, e)
        return FALLBACK_THUMBNAIL
    return to_data_url(buf.getvalue(), "image/jpeg")
