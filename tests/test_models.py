"""
Tests — Data Model
===================
"""

from __future__ import annotations

from ecuacoord.models import GeographicPoint, ProjectedPoint, RawCoordinateRecord


class TestRawCoordinateRecordFromMapping:
    def test_nested_coordinates(self) -> None:
        record = RawCoordinateRecord.from_mapping(
            {"id": 7, "name": "P1", "coordinates": {"latitude": "-0,22", "longitude": "-78,5"}}
        )
        assert record.point == GeographicPoint("-0,22", "-78,5")
        assert record.id == "7"
        assert record.name == "P1"
        assert record.description == ""
        assert record.target_crs is None
        assert not record.fan_out

    def test_top_level_lat_lng(self) -> None:
        record = RawCoordinateRecord.from_mapping({"latitude": -0.2, "longitude": -78.5})
        assert record.point == GeographicPoint(-0.2, -78.5)

    def test_projected(self) -> None:
        record = RawCoordinateRecord.from_mapping(
            {"easting": "499.450,00", "northing": 9_975_663, "system": "SIRES-DMQ",
             "target_system": "EPSG:4326"}
        )
        assert record.point == ProjectedPoint("499.450,00", 9_975_663, "SIRES-DMQ")
        assert record.target_crs == "EPSG:4326"

    def test_projected_without_system(self) -> None:
        record = RawCoordinateRecord.from_mapping({"easting": 1, "northing": 2, "system": ""})
        assert record.point == ProjectedPoint(1, 2, None)

    def test_target_all_means_fan_out(self) -> None:
        record = RawCoordinateRecord.from_mapping(
            {"latitude": 0, "longitude": -78, "targetSystem": "all"}
        )
        assert record.fan_out
        assert record.target_crs is None

    def test_blank_values_give_no_point(self) -> None:
        record = RawCoordinateRecord.from_mapping({"latitude": "", "longitude": "-78"})
        assert record.point is None
        assert record.id is None
        assert record.name is None
