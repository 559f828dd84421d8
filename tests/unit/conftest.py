# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Shared pytest configuration for all unit tests.

Every test under tests/unit/ is marked ``unit`` so the suite can be
selected with ``pytest -m unit``. pytestmark in a conftest.py does not
propagate to sibling modules, so the marker is applied at collection time.
"""

import pytest


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Add the unit marker to every test collected from tests/unit."""
    unit_marker = pytest.mark.unit

    for item in items:
        if "tests/unit" in item.path.as_posix():
            if not any(marker.name == "unit" for marker in item.iter_markers()):
                item.add_marker(unit_marker)
