"""Pytest configuration and shared fixtures for caisson tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from caissons.domain.value_objects import (
    BackSpec,
    CabinetConfig,
    CabinetFamily,
    DoorSpec,
    HingeSelection,
    MaterialThicknesses,
    ShelfSpec,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "cli: tests that invoke the Typer application")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def base_config() -> CabinetConfig:
    """600 x 720 x 560 base unit, one overlay door hinged on the left.

    18 mm carcass and back, standard 110° hinge on an EXPANDO 0 mm plate,
    no shelves and no carcass fastener.
    """
    return CabinetConfig(
        family=CabinetFamily.BASE,
        width=600,
        height=720,
        depth=560,
        thickness=MaterialThicknesses(carcass=18, back=18, door=18, shelf=18),
        doors=DoorSpec(count=1, gap=2),
        hinge=HingeSelection(),
        name="base-600",
    )


@pytest.fixture
def open_config() -> CabinetConfig:
    """Doorless 800 x 1800 x 300 column with two shelves on pins."""
    return CabinetConfig(
        family=CabinetFamily.COLUMN,
        width=800,
        height=1800,
        depth=300,
        back=BackSpec(),
        doors=DoorSpec(count=0),
        shelves=ShelfSpec(count=2, pins=True),
        name="open",
    )


# =============================================================================
# Configuration file fixtures
# =============================================================================


@pytest.fixture
def config_data() -> Callable[..., dict[str, Any]]:
    """Factory for the smallest valid configuration, with cabinet overrides."""

    def _data(**cabinet: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "schema_version": "1.0",
            "cabinet": {"width": 600, "height": 720, "depth": 560},
        }
        data["cabinet"].update(cabinet)
        return data

    return _data


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a configuration dictionary (or raw text) to a file."""

    def _write(data: dict[str, Any] | str, name: str = "config.json") -> Path:
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
