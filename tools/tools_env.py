# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from pathlib import Path

REPO_ROOT = Path(__file__).parent.parent.resolve()

# The lint tests check the files that are checked in to git.
# They can only run in a git checkout, not from e.g. an unpacked source distribution.
IS_GIT_CHECKOUT = (REPO_ROOT / ".git").exists()
