import pytest

from youtube import extract_youtube_id, youtube_thumbnail


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://youtu.be/abc123", "abc123"),
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42s", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
        ("not a url", ""),
        ("", ""),
    ],
)
def test_extract_youtube_id(url, expected):
    assert extract_youtube_id(url) == expected


def test_thumbnail_for_id():
    assert youtube_thumbnail("abc123") == "https://img.youtube.com/vi/abc123/maxresdefault.jpg"


def test_thumbnail_empty_without_id():
    assert youtube_thumbnail(extract_youtube_id("not a url")) == ""
