"""
Tests — CRS Registry
=====================
Unit tests for :class:`ecuacoord.registry.CRSRegistry`.
"""

from __future__ import annotations

import pytest

from ecuacoord.exceptions import CRSError, UnknownSystemError
from ecuacoord.registry import (
    DEFAULT_REGISTRY,
    GEOGRAPHIC_CODE,
    MUNICIPAL_CODE,
    CRSKind,
    CRSRegistry,
    Unit,
)


class TestEcuadorCatalogue:
    """The fixed six-system catalogue."""

    def test_registration_order(self, registry: CRSRegistry) -> None:
        assert registry.codes() == [
            "EPSG:4326",
            "SIRES-DMQ",
            "UTM-17N",
            "UTM-17S",
            "UTM-18N",
            "UTM-18S",
        ]
        assert [d.code for d in registry.list_systems()] == registry.codes()
        assert len(registry) == 6

    def test_single_geographic_system(self, registry: CRSRegistry) -> None:
        geographic = registry.geographic
        assert geographic.code == GEOGRAPHIC_CODE
        assert geographic.is_geographic
        assert geographic.unit is Unit.DEGREES
        assert [d.code for d in registry if d.is_geographic] == [GEOGRAPHIC_CODE]

    def test_projected_systems_use_meters(self, registry: CRSRegistry) -> None:
        for definition in registry:
            if definition.code != GEOGRAPHIC_CODE:
                assert definition.kind is CRSKind.PROJECTED
                assert definition.unit is Unit.METERS

    def test_sires_definition_and_window(self, registry: CRSRegistry) -> None:
        sires = registry.get(MUNICIPAL_CODE)
        assert "+lon_0=-78.5" in sires.proj_definition
        assert "+k=1.0004584" in sires.proj_definition
        assert sires.validity is not None
        assert sires.validity.contains(499_450.0, 9_975_663.0)
        assert not sires.validity.contains(449_999.0, 9_975_663.0)
        assert not sires.validity.contains(500_000.0, 10_050_001.0)

    def test_utm_systems_have_no_window(self, registry: CRSRegistry) -> None:
        for code in ("UTM-17N", "UTM-17S", "UTM-18N", "UTM-18S"):
            assert registry.get(code).validity is None

    def test_default_registry_is_the_catalogue(self) -> None:
        assert DEFAULT_REGISTRY.codes() == CRSRegistry.ecuador().codes()


class TestLookup:
    """``get`` / ``__contains__`` behaviour."""

    def test_contains(self, registry: CRSRegistry) -> None:
        assert "UTM-17S" in registry
        assert "UTM-19S" not in registry

    def test_unknown_code_raises(self, registry: CRSRegistry) -> None:
        with pytest.raises(UnknownSystemError) as exc_info:
            registry.get("UTM-19S")
        assert exc_info.value.code == "UTM-19S"
        assert "EPSG:4326" in exc_info.value.message

    def test_unknown_system_is_a_crs_error(self, registry: CRSRegistry) -> None:
        with pytest.raises(CRSError):
            registry.get("")


class TestConstruction:
    """Registry construction invariants."""

    def test_duplicate_codes_rejected(self, registry: CRSRegistry) -> None:
        utm = registry.get("UTM-17S")
        with pytest.raises(CRSError, match="Duplicate"):
            CRSRegistry([registry.geographic, utm, utm])

    def test_geographic_system_required(self, registry: CRSRegistry) -> None:
        with pytest.raises(CRSError, match="geographic"):
            CRSRegistry([registry.get("UTM-17S")])
