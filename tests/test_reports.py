from datetime import timedelta

from dispatch.reports import rank_driver_distances, report_to_frame
from drivers.models import Driver
from orders.models import City

from conftest import make_delivery


def test_report_is_sorted_by_total_distance(now):
    tlv = City(name="Tel-Aviv", id=1)
    a = Driver.new("A", tlv, driver_id=1)
    b = Driver.new("B", tlv, driver_id=2)

    report = rank_driver_distances([make_delivery(a, now, 5.0), make_delivery(b, now, 12.0)])

    assert [(row.driver, row.total_distance) for row in report] == [(b, 12.0), (a, 5.0)]


def test_report_sums_per_driver(now):
    tlv = City(name="Tel-Aviv", id=1)
    a = Driver.new("A", tlv, driver_id=1)
    b = Driver.new("B", tlv, driver_id=2)

    report = rank_driver_distances([
        make_delivery(a, now, 5.0),
        make_delivery(a, now + timedelta(hours=2), 9.0),
        make_delivery(b, now, 12.0),
    ])

    assert [(row.driver.name, row.total_distance) for row in report] == [("A", 14.0), ("B", 12.0)]


def test_ties_are_ordered_by_driver_id(now):
    tlv = City(name="Tel-Aviv", id=1)
    first = Driver.new("First", tlv, driver_id=3)
    second = Driver.new("Second", tlv, driver_id=7)

    report = rank_driver_distances([make_delivery(second, now, 4.0), make_delivery(first, now, 4.0)])

    assert [row.driver for row in report] == [first, second]


def test_city_report_excludes_other_cities(now):
    tlv = City(name="Tel-Aviv", id=1)
    jerusalem = City(name="Jerusalem", id=2)
    mary = Driver.new("Mary", tlv, driver_id=1)
    robert = Driver.new("Robert", jerusalem, driver_id=2)
    deliveries = [make_delivery(mary, now, 3.0), make_delivery(robert, now, 19.0)]

    report = rank_driver_distances(deliveries, city=tlv)

    assert [row.driver for row in report] == [mary]


def test_empty_report(now):
    assert rank_driver_distances([]) == []
    assert report_to_frame([]).empty


def test_report_frame_columns(now):
    tlv = City(name="Tel-Aviv", id=1)
    mary = Driver.new("Mary", tlv, driver_id=1)

    frame = report_to_frame(rank_driver_distances([make_delivery(mary, now, 3.456)]))

    assert list(frame.columns) == ["rank", "driver_id", "driver", "city", "total_distance"]
    assert frame.iloc[0]["driver"] == "Mary"
    assert frame.iloc[0]["total_distance"] == 3.46
