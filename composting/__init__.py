# composting/__init__.py
"""
Composting module: the decomposition engine and its environmental models.

Provides:
- Per-pile configuration and material classification (from config.py)
- Band lookup tables shared by the models (from curves.py)
- Climate provider interface (from environment.py)
- Moisture, aeration, temperature and C:N ratio models
- Bin contents (from materials.py)
- The CompostProcessor engine (from processor.py)
"""

# Configuration
from composting.config import CompostConfig, MaterialType

# Shared lookup tables
from composting.curves import ModifierCurve

# Environment collaborator
from composting.environment import ClimateProvider, ClimateSample

# Environmental models
from composting.moisture import MoistureModel
from composting.aeration import AerationModel
from composting.temperature import TemperatureModel
from composting.ratio import MaterialRatioModel

# Contents and engine
from composting.materials import PileInventory
from composting.processor import CompostProcessor, PileState, is_legacy_state

__all__ = [
    # Config
    "CompostConfig",
    "MaterialType",
    # Curves
    "ModifierCurve",
    # Environment
    "ClimateProvider",
    "ClimateSample",
    # Models
    "MoistureModel",
    "AerationModel",
    "TemperatureModel",
    "MaterialRatioModel",
    # Engine
    "PileInventory",
    "CompostProcessor",
    "PileState",
    "is_legacy_state",
]
