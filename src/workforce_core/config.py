"""Filesystem configuration for Workforce Core.

This module provides a single, simple paths class used by the loaders and
the gold-layer marts.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class DataPaths:
    """All filesystem paths used by the batch pipelines.

    Attributes:
        data_root: Root directory for all data layers.

    Directory Structure:
        data_root/
        ├── a_raw/           # Bronze: exports from the warehouse
        │   ├── geolocation/ # device pings (device_id, timestamp, area, role)
        │   └── sales/       # sales log (sale_id, timestamp)
        └── c_processed/     # Gold: marts
            └── staffing/    # mart_staffing_gap
    """

    data_root: Path

    @classmethod
    def from_root(cls, data_root: str | Path) -> DataPaths:
        """Create DataPaths from a root directory.

        Args:
            data_root: Root directory for the data layers.

        Returns:
            DataPaths instance.

        Examples:
            >>> paths = DataPaths.from_root("data")
            >>> paths.data_root
            PosixPath('data')
        """
        if isinstance(data_root, str):
            data_root = Path(data_root)

        return cls(data_root=data_root)

    @property
    def raw_geolocation(self) -> Path:
        """Bronze layer: raw geolocation ping CSVs."""
        return self.data_root / "a_raw" / "geolocation"

    @property
    def raw_sales(self) -> Path:
        """Bronze layer: raw sales log CSVs."""
        return self.data_root / "a_raw" / "sales"

    @property
    def mart_staffing(self) -> Path:
        """Gold layer: staffing gap marts."""
        return self.data_root / "c_processed" / "staffing"

    def ensure_dirs(self) -> None:
        """Create all directories in the data structure."""
        for path in [
            self.raw_geolocation,
            self.raw_sales,
            self.mart_staffing,
        ]:
            path.mkdir(parents=True, exist_ok=True)
