# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------


def get_short_slogan() -> str:
    """
    Short slogan used in e.g. Python documentation and the command line help.
    """
    result = "Create, populate and run Lattice Radiant FPGA projects from Python"
    return result


def get_cli_epilog() -> str:
    """
    Text shown at the end of the command line help.

    Lists the environment variables that control the tool version check, since those can not be
    discovered from the argument list.
    """
    return """\
environment:
  TOOLRTF                   Radiant installation path, the tool version is read from it
  REQUIRED_RADIANT_VERSION  the Radiant version the projects are maintained for
  ADI_IGNORE_VERSION_CHECK  set to 1 to down-grade a version mismatch to a warning
  RADIANT_TCL_SHELL         the Radiant Tcl shell executable (default 'radiantc')
"""
