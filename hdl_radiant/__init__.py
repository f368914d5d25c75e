# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from __future__ import annotations

from pathlib import Path

from .about import get_short_slogan

REPO_ROOT = Path(__file__).parent.parent.resolve()

__version__ = "1.0.0-dev"

# We have the slogan in one place only, instead of repeating it here in a proper docstring.
__doc__ = get_short_slogan()

# Suffix of the Radiant project descriptor file.
PROJECT_FILE_SUFFIX = ".rdf"
