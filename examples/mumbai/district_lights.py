import logging
from datetime import date

import matplotlib.pyplot as plt

from nighttime_lights import (
    MUMBAI_COORDINATE_SYSTEM,
    BoundingBox,
    aggregate_dataframe,
    aggregate_timeseries,
    load_shapefile,
    read_nightlights_datacube,
)
from nighttime_lights.mask import polygon_mask

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    grid = MUMBAI_COORDINATE_SYSTEM
    bounds = BoundingBox(
        lon_min=grid.top_left.longitude,
        lon_max=grid.bottom_right.longitude,
        lat_min=grid.bottom_right.latitude,
        lat_max=grid.top_left.latitude,
    )

    rad, cf = read_nightlights_datacube(
        date(2015, 1, 1), date(2020, 12, 1), bounds=bounds, compute=True
    )
    print(rad)

    districts = load_shapefile("assets/mumbai_map/mumbai_districts.shp")
    lights = aggregate_dataframe(grid, rad, districts, "District")
    print(lights.head())

    # Mean radiance over the city instead of the total
    city = polygon_mask(grid, districts.union_all())
    mean_radiance = aggregate_timeseries(rad, city) / city.sum()
    coverage = aggregate_timeseries(cf, city) / city.sum()
    logger.info(f"Average cloud-free observations per pixel: {coverage.mean():.1f}")

    lights.plot(title="Radiance by district")
    plt.figure()
    plt.plot(rad.indexes["time"], mean_radiance)
    plt.title("Mean radiance, Mumbai")
    plt.show()


if __name__ == "__main__":
    main()
