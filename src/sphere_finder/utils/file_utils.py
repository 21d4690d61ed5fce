"""Locating and ordering slice images on disk."""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

SLICE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp")

_DIGITS = re.compile(r'(\d+)')


def natural_sort_key(path: Path) -> tuple:
    """Sort key treating digit runs in the file stem as numbers.

    ``z2.tif`` sorts before ``z10.tif``, which plain string ordering gets wrong.
    """
    return tuple(
        int(part) if part.isdigit() else part.lower()
        for part in _DIGITS.split(Path(path).stem)
    )


def get_image_files(
    directory: Union[str, Path],
    extensions: Optional[Iterable[str]] = None
) -> List[Path]:
    """Slice images in ``directory``, naturally sorted.

    Extensions are matched case-insensitively, so ``Z001.TIF`` and
    ``z002.tif`` end up in the same stack.
    """
    wanted = {ext.lower() for ext in (extensions or SLICE_EXTENSIONS)}
    files = [
        p for p in Path(directory).iterdir()
        if p.is_file() and p.suffix.lower() in wanted
    ]
    return sorted(files, key=natural_sort_key)

__all__ = ["natural_sort_key", "get_image_files", "SLICE_EXTENSIONS"]
