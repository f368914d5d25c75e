# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DeviceSettings:
    device: str = ""
    performance: str = ""
    board: str = ""


# Project names carry the board as a suffix, e.g. "fmcomms2_ctpnxe".
BOARDS = {
    "_ctpnxe": DeviceSettings(
        device="LFCPNX-100-9LFG672C",
        performance="9_High-Performance_1.0V",
        board="Certus Pro NX Evaluation Board",
    ),
}


def resolve_device_settings(
    project_name: str, device: str = "", performance: str = "", board: str = ""
) -> DeviceSettings:
    """
    Get the device settings for a project.
    If the project name contains the suffix of a known board, the settings of that board are
    used and the manually given values are ignored.
    """
    for suffix, settings in BOARDS.items():
        if suffix in project_name:
            return settings

    return DeviceSettings(device=device, performance=performance, board=board)
