"""
Date-filtered file relocation.

Walks a source tree, picks the files whose timestamp lies strictly inside a
DateRange and moves them, flattened, into one destination folder.
"""

import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Generator
from PIL import ExifTags, Image, UnidentifiedImageError
from tqdm import tqdm

from .dates import DateRange
from .errors import MoveError, WalkError

DATE_SOURCES = ("mtime", "exif")

EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"


def get_exif_date(filepath: Path) -> datetime | None:
    """Extract the capture date from an image's EXIF data.

    Uses 'DateTimeOriginal' from the Exif IFD, falling back to 'DateTime'.
    Returns None for non-images and images without a usable date.
    """
    try:
        with Image.open(filepath) as img:
            exif = img.getexif()
            if not exif:
                return None
            taken = exif.get_ifd(ExifTags.IFD.Exif).get(ExifTags.Base.DateTimeOriginal)
            if not taken:
                taken = exif.get(ExifTags.Base.DateTime)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError):
        return None

    if not isinstance(taken, str):
        return None

    # Some cameras pad the field with NULs
    try:
        return datetime.strptime(taken.strip("\x00 "), EXIF_DATE_FORMAT)
    except ValueError:
        return None


def is_in_range(timestamp: datetime, date_range: DateRange) -> bool:
    """True when `timestamp` is strictly after the start and strictly before the end."""
    return date_range.start < timestamp < date_range.end


def _raise_walk_error(error: OSError):
    raise WalkError(f"Error walking {error.filename}: {error.strerror or error}") from error


def get_timestamp(filepath: Path, date_source: str = "mtime") -> datetime:
    """
    Timestamp used to match a file against the date range.

    Args:
        filepath: The file to inspect.
        date_source: "mtime" for the modification time, "exif" for the EXIF
            capture date (falling back to the modification time).

    Raises:
        WalkError: If the file cannot be stat'ed.
    """
    if date_source == "exif":
        taken = get_exif_date(filepath)
        if taken is not None:
            return taken

    try:
        stat = os.lstat(filepath)
    except OSError as e:
        _raise_walk_error(e)
    return datetime.fromtimestamp(stat.st_mtime)


def find_matching_files(
    source: Path,
    date_range: DateRange,
    date_source: str = "mtime",
    skip: set[Path] | None = None,
) -> Generator[tuple[Path, datetime], None, None]:
    """
    Recursively walk `source` and yield the files inside `date_range`.

    Args:
        source: The directory tree to walk.
        date_range: Strict (start, end) bounds.
        date_source: Where timestamps come from ("mtime" or "exif").
        skip: Directories not to descend into (e.g. a destination inside source).

    Yields:
        (path, timestamp) for every non-directory entry in range, symlinks
        to directories included.

    Raises:
        WalkError: If any directory of the tree cannot be read.
    """
    if date_source not in DATE_SOURCES:
        raise ValueError(f"Unknown date source: {date_source}")

    skip_real = {os.path.realpath(p) for p in (skip or ())}

    for dirpath, dirnames, filenames in os.walk(source, onerror=_raise_walk_error):
        # Symlinks to directories are entries like any file, never walked into
        links = [d for d in dirnames if os.path.islink(os.path.join(dirpath, d))]

        # Prune skipped folders
        dirnames[:] = [
            d for d in dirnames
            if d not in links and os.path.realpath(os.path.join(dirpath, d)) not in skip_real
        ]

        for filename in filenames + links:
            filepath = Path(dirpath) / filename
            moment = get_timestamp(filepath, date_source)
            if is_in_range(moment, date_range):
                yield filepath, moment


def move_file(src: Path, dest_dir: Path) -> Path:
    """
    Move `src` into `dest_dir`, keeping only its base name.

    An existing file with the same name in `dest_dir` is overwritten; an
    existing directory (or link to one) with that name is left alone and the
    move fails.

    Raises:
        MoveError: If the move fails.
    """
    dst = dest_dir / src.name
    # shutil.move would move src inside such a directory
    if dst.is_dir():
        raise MoveError(f"Error moving file {src}: {dst} is a directory")
    try:
        shutil.move(str(src), str(dst))
    except OSError as e:
        raise MoveError(f"Error moving file {src}: {e}") from e
    return dst


def organize(
    source: Path,
    dest_path: Path,
    date_range: DateRange,
    date_source: str = "mtime",
) -> dict:
    """
    Move every file of `source` inside `date_range` into `dest_path`.

    `dest_path` (and its parents) is created before any move. A failed move is
    reported and the walk goes on; a failed walk aborts.

    Args:
        source: Root of the tree to walk.
        dest_path: Folder receiving the matching files.
        date_range: Strict (start, end) bounds.
        date_source: "mtime" or "exif".

    Returns:
        Report dict with counts and the failed moves.

    Raises:
        MoveError: If `dest_path` cannot be created.
        WalkError: If the walk fails.
    """
    source = Path(source)
    dest_path = Path(dest_path)

    try:
        dest_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise MoveError(f"Error creating destination directory: {e}") from e

    matched_count = 0
    moved_count = 0
    failures: list[dict] = []

    matches = find_matching_files(source, date_range, date_source, skip={dest_path})

    with tqdm(unit="file", desc="Moving", disable=None) as pbar:
        for filepath, _ in matches:
            matched_count += 1
            try:
                move_file(filepath, dest_path)
            except MoveError as e:
                failures.append({"path": str(filepath), "error": str(e)})
                tqdm.write(f"[ERROR] {e}")
            else:
                moved_count += 1
            pbar.update(1)

    return {
        "source": str(source),
        "destination": str(dest_path),
        "date_source": date_source,
        "executed_at": datetime.now().isoformat(timespec='seconds'),
        "matched_count": matched_count,
        "moved_count": moved_count,
        "failed_count": len(failures),
        "failures": failures,
    }
