"""Video class for the reference video library."""
import uuid
from typing import Optional

DIFFICULTY_LEVELS = ("Beginner", "Intermediate", "Advanced")


class Video:
    """A how-to video linked to the vehicle."""

    def __init__(
            self,
            title: str,
            youtube_link: str,
            category: str = "General",
            description: Optional[str] = None,
            difficulty_level: str = "Intermediate",
            id: Optional[str] = None,
    ):
        self.id = id or uuid.uuid4().hex
        self.title = title
        self.youtube_link = youtube_link
        self.category = category
        self.description = description
        self.difficulty_level = difficulty_level

    def matches_search(self, term: str) -> bool:
        """Case-insensitive substring search over title and description."""
        term = term.lower()
        return term in self.title.lower() or term in (self.description or "").lower()


def validate_video(video: Video) -> None:
    if not video.title or not video.title.strip():
        raise ValueError("Video title is required")
    if not video.youtube_link or not video.youtube_link.strip():
        raise ValueError("Video link is required")
    if video.difficulty_level not in DIFFICULTY_LEVELS:
        raise ValueError(
            f"Difficulty must be one of {', '.join(DIFFICULTY_LEVELS)}, "
            f"got {video.difficulty_level!r}"
        )
