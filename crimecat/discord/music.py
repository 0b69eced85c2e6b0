from __future__ import annotations

from pathlib import Path
from typing import List, Optional

ALLOWED_MUSIC_EXTENSIONS = ("mp3", "wav", "ogg", "flac", "aac", "m4a", "opus")
MAX_STORAGE_BYTES = 100 * 1024 * 1024  # per user


def user_music_dir(base_dir: str | Path, user_id: int | str) -> Path:
    return Path(base_dir) / str(user_id)


def list_music_files(base_dir: str | Path, user_id: int | str) -> List[Path]:
    """
    The user's uploaded audio files, sorted by file name.
    """
    folder = user_music_dir(base_dir, user_id)
    if not folder.is_dir():
        return []
    files = [
        p
        for p in folder.iterdir()
        if p.is_file() and p.suffix.lower().lstrip(".") in ALLOWED_MUSIC_EXTENSIONS
    ]
    return sorted(files, key=lambda p: p.name)


def find_music_file(base_dir: str | Path, user_id: int | str, file_name: str) -> Optional[Path]:
    """
    Match by full file name first, then by name without extension.
    """
    wanted = (file_name or "").strip()
    if not wanted:
        return None
    files = list_music_files(base_dir, user_id)
    for p in files:
        if p.name == wanted:
            return p
    for p in files:
        if p.stem == wanted:
            return p
    return None


def used_bytes(base_dir: str | Path, user_id: int | str) -> int:
    return sum(p.stat().st_size for p in list_music_files(base_dir, user_id))


def describe_file(path: Path, *, base_dir: str | Path, user_id: int | str) -> str:
    size_mb = path.stat().st_size / (1024 * 1024)
    left_mb = max(0, MAX_STORAGE_BYTES - used_bytes(base_dir, user_id)) / (1024 * 1024)
    return (
        f"🎵 **{path.stem}**\n"
        f"- 형식: {path.suffix.lstrip('.').lower()}\n"
        f"- 크기: {size_mb:.2f}MB\n"
        f"- 남은 저장공간: {left_mb:.2f}MB"
    )


__all__ = [
    "ALLOWED_MUSIC_EXTENSIONS",
    "MAX_STORAGE_BYTES",
    "user_music_dir",
    "list_music_files",
    "find_music_file",
    "used_bytes",
    "describe_file",
]
