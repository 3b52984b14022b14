from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nighttime_lights.coordinate_system import CoordinateSystem
from nighttime_lights.grids import Grids, get_coordinate_system


class NightlightsSettings(BaseSettings):
    rad_path: Path = Field(
        default=Path("/mnt/giant-disk/nighttimelights/monthly/rad/"),
        description="Directory holding the monthly average radiance rasters",
    )

    cf_path: Path = Field(
        default=Path("/mnt/giant-disk/nighttimelights/monthly/cf/"),
        description="Directory holding the monthly cloud-free coverage rasters",
    )

    chunks: int | dict[str, int] | str = Field(
        default="auto", description="Dask chunking used when opening rasters lazily"
    )

    coordinate_system: Grids = Field(
        default=Grids.INDIA,
        description="Reference grid the loaded rasters are aligned to",
    )

    print_progress: bool = Field(
        default=True, description="Whether to print progress information"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="NIGHTLIGHTS_",
    )

    @property
    def grid(self) -> CoordinateSystem:
        return get_coordinate_system(self.coordinate_system)

    def should_print_progress(self, print_progress: bool | None = None) -> bool:
        """
        Determine if progress should be printed.

        Args:
            print_progress: Optional override for the print_progress setting

        Returns:
            Boolean indicating whether progress should be printed
        """
        if print_progress is None:
            return self.print_progress
        return print_progress
