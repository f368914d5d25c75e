# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from hdl_radiant.cli import main

if __name__ == "__main__":
    main()
