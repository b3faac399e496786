"""
ecuacoord
=========
Coordinate transformation between the reference systems used in Ecuador:
WGS84 geographic, the Quito municipal system SIRES-DMQ and UTM zones
17/18 north and south.
"""

from ecuacoord.batch import (
    BatchConfig,
    BatchOrchestrator,
    BatchOutcome,
    transform_batch,
    transform_batch_async,
    transform_single,
)
from ecuacoord.detection import detect_best_system
from ecuacoord.exceptions import EcuaCoordError
from ecuacoord.export import ExportFormat, export_results
from ecuacoord.models import (
    GeographicPoint,
    ProjectedPoint,
    RawCoordinateRecord,
    ResultRecord,
)
from ecuacoord.numbers import parse_number
from ecuacoord.precision import PrecisionClassifier, PrecisionThresholds, QualityBand
from ecuacoord.projection import ProjectionAdapter
from ecuacoord.registry import DEFAULT_REGISTRY, CRSRegistry
from ecuacoord.stats import haversine_distance, summarize_results
from ecuacoord.validators import validate_geographic, validate_projected

__version__ = "0.1.0"

__all__ = [
    "BatchConfig",
    "BatchOrchestrator",
    "BatchOutcome",
    "CRSRegistry",
    "DEFAULT_REGISTRY",
    "EcuaCoordError",
    "ExportFormat",
    "GeographicPoint",
    "PrecisionClassifier",
    "PrecisionThresholds",
    "ProjectedPoint",
    "ProjectionAdapter",
    "QualityBand",
    "RawCoordinateRecord",
    "ResultRecord",
    "detect_best_system",
    "export_results",
    "haversine_distance",
    "parse_number",
    "summarize_results",
    "transform_batch",
    "transform_batch_async",
    "transform_single",
    "validate_geographic",
    "validate_projected",
]
