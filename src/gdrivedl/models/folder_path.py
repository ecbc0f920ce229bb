"""Shared-drive folder paths: `<SharedDriveName>/<Folder1>/<Folder2>/...`."""

from __future__ import annotations

from dataclasses import dataclass

from gdrivedl.errors import InvalidInputError

SEPARATOR = "/"


@dataclass(slots=True, frozen=True)
class FolderPath:
    """
    Parsed folder path.

    segments[0] is the shared drive display name (matched case-insensitively),
    segments[1:] are folder names (matched exactly), resolved in order.
    """

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.segments) < 2:
            raise InvalidInputError(
                "Folder path must include shared drive and at least one folder "
                "(e.g., 'DriveName/Folder')",
                details={"folder_path": SEPARATOR.join(self.segments)},
            )
        if any(not s for s in self.segments):
            raise InvalidInputError(
                "Folder path must not contain empty segments",
                details={"folder_path": SEPARATOR.join(self.segments)},
            )

    @classmethod
    def parse(cls, text: str) -> FolderPath:
        if not isinstance(text, str):
            raise InvalidInputError("Folder path must be a string")
        parts = text.split(SEPARATOR)
        # "Drive/Folder/" is accepted as "Drive/Folder".
        while parts and not parts[-1]:
            parts.pop()
        return cls(tuple(parts))

    @property
    def drive_name(self) -> str:
        return self.segments[0]

    @property
    def folder_names(self) -> tuple[str, ...]:
        return self.segments[1:]

    def __str__(self) -> str:
        return SEPARATOR.join(self.segments)
