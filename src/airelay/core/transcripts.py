"""YouTube transcript retrieval for the summarizer endpoint.

:class:`TranscriptFetcher` resolves a video URL to an ordered list of
:class:`TranscriptSegment` values using ``youtube-transcript-api``.  A video
with captions disabled, or with no captions in the preferred languages, yields
an empty list; the route turns that into a 404.  Any other failure (network,
YouTube blocking the request) propagates to the caller.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from youtube_transcript_api import (
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    YouTubeTranscriptApi,
)

from airelay.core.errors import InvalidVideoUrl

logger = logging.getLogger(__name__)

_VIDEO_ID = re.compile(r"^[A-Za-z0-9_-]{11}$")
_VIDEO_URL = re.compile(
    r"(?:youtube(?:-nocookie)?\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?|shorts|live)/|.*[?&]v=)"
    r"|youtu\.be/)"
    r"([A-Za-z0-9_-]{11})",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class TranscriptSegment:
    """One timed unit of caption text."""

    text: str
    start: float = 0.0
    duration: float = 0.0


def extract_video_id(url: str) -> str:
    """Return the 11-character video id contained in *url*.

    Bare ids are accepted as-is.  Watch, short-link, embed, ``/v/``,
    shorts and live URLs are recognised.

    Raises:
        InvalidVideoUrl: No video id could be found.
    """
    candidate = url.strip()
    if _VIDEO_ID.match(candidate):
        return candidate

    match = _VIDEO_URL.search(candidate)
    if match is None:
        raise InvalidVideoUrl("Could not find a YouTube video id in the supplied URL.")
    return match.group(1)


def join_transcript(segments: Iterable[TranscriptSegment]) -> str:
    """Space-join segment text, keeping playback order."""
    return " ".join(segment.text for segment in segments)


class TranscriptFetcher:
    """Fetch captions for YouTube videos.

    Args:
        api: A ``YouTubeTranscriptApi`` instance.  One is created if omitted.
        languages: Language codes to try, in order of preference.
    """

    def __init__(
        self,
        api: YouTubeTranscriptApi | None = None,
        languages: Sequence[str] = ("en",),
    ) -> None:
        self.api = api if api is not None else YouTubeTranscriptApi()
        self.languages = tuple(languages)

    def fetch(self, url: str) -> list[TranscriptSegment]:
        """Return the transcript of the video at *url*.

        Returns:
            Segments in playback order, or ``[]`` when the video has no
            usable transcript.

        Raises:
            InvalidVideoUrl: *url* does not identify a video.
        """
        video_id = extract_video_id(url)
        try:
            fetched = self.api.fetch(video_id, languages=self.languages)
        except (TranscriptsDisabled, NoTranscriptFound, VideoUnavailable) as exc:
            logger.info("No transcript for video %s: %s", video_id, type(exc).__name__)
            return []

        segments = [
            TranscriptSegment(text=snippet.text, start=snippet.start, duration=snippet.duration)
            for snippet in fetched
        ]
        logger.debug("Fetched %d transcript segments for %s", len(segments), video_id)
        return segments
