"""
Purpose: Driver rank reports (read side).
What it does:
Aggregates persisted deliveries into one row per driver with the total distance
they drove, highest first. Optionally restricted to the drivers of one city.

Ties on total distance are ordered by lowest driver id so reports are stable.
"""

from typing import Iterable, List, Optional

import pandas as pd

from orders.models import City, Delivery, DriverDistance


def rank_driver_distances(
    deliveries: Iterable[Delivery],
    city: Optional[City] = None,
) -> List[DriverDistance]:
    deliveries = list(deliveries)
    if city is not None:
        deliveries = [delivery for delivery in deliveries if delivery.driver.city.same_as(city)]

    if not deliveries:
        return []

    drivers = {delivery.driver.id: delivery.driver for delivery in deliveries}

    df = pd.DataFrame(
        {
            "driver_id": [delivery.driver.id for delivery in deliveries],
            "distance": [delivery.distance for delivery in deliveries],
        }
    )

    totals = (
        df.groupby("driver_id", as_index=False)["distance"]
        .sum()
        .sort_values(["distance", "driver_id"], ascending=[False, True], kind="mergesort")
    )

    return [
        DriverDistance(driver=drivers[int(row.driver_id)], total_distance=float(row.distance))
        for row in totals.itertuples(index=False)
    ]


def report_to_frame(report: List[DriverDistance]) -> pd.DataFrame:
    """
    Flattens a rank report for printing or CSV export.
    """
    return pd.DataFrame(
        [
            {
                "rank": position,
                "driver_id": row.driver.id,
                "driver": row.driver.name,
                "city": row.driver.city.name,
                "total_distance": round(row.total_distance, 2),
            }
            for position, row in enumerate(report, start=1)
        ],
        columns=["rank", "driver_id", "driver", "city", "total_distance"],
    )
