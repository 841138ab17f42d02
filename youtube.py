import re

YOUTUBE_ID_PATTERN = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\s]+)")


def extract_youtube_id(url: str) -> str:
    """Return the video id from a watch, short or embed URL, or "" when none matches."""
    match = YOUTUBE_ID_PATTERN.search(url or "")
    return match.group(1) if match else ""


def youtube_thumbnail(youtube_id: str) -> str:
    if not youtube_id:
        return ""
    return f"https://img.youtube.com/vi/{youtube_id}/maxresdefault.jpg"
