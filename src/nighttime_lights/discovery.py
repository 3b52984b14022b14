import re
from datetime import date, datetime
from pathlib import Path

from pydantic import validate_call

from nighttime_lights.errors import DataNotFoundError
from nighttime_lights.logging import get_logger

logger = get_logger(__name__)

# VIIRS composites embed their coverage period, e.g.
# SVDNB_npp_20140101-20140131_75N060E_vcmcfg_v10_c2015006171539.avg_rade9h.tif
_DATE_RANGE_PATTERN = re.compile(r"_(\d{8})-\d{8}_")


def extract_date(filename: str) -> date | None:
    """Start date of the period covered by a raster file, if its name has one."""
    match = _DATE_RANGE_PATTERN.search(filename)
    if match is None:
        return None
    try:
        return datetime.strptime(match.group(1), "%Y%m%d").date()
    except ValueError:
        logger.debug(f"Ignoring {filename}: {match.group(1)} is not a valid date")
        return None


@validate_call
def sort_files_by_date(
    folder_path: Path,
    start_date: date = date.min,
    end_date: date | None = None,
) -> list[tuple[Path, date]]:
    """List the raster files of a folder within a date range.

    Args:
        folder_path: Directory to search.
        start_date: First date to include.
        end_date: Last date to include. Defaults to today.

    Returns:
        ``(path, date)`` pairs sorted by ascending date. Files whose names do
        not contain a date are left out.

    Raises:
        DataNotFoundError: If ``folder_path`` is not a directory.
    """
    if not folder_path.is_dir():
        raise DataNotFoundError(f"Directory {folder_path} does not exist")

    if end_date is None:
        end_date = date.today()

    files = []
    for path in folder_path.iterdir():
        file_date = extract_date(path.name)
        if file_date is not None and start_date <= file_date <= end_date:
            files.append((path, file_date))

    files.sort(key=lambda item: (item[1], item[0].name))
    logger.debug(
        f"Found {len(files)} files in {folder_path} "
        f"between {start_date} and {end_date}"
    )
    return files
