# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

import os
from pathlib import Path

import pytest

from hdl_radiant.errors import DuplicateMemberError, SourceAddError, ToolCommandError
from hdl_radiant.project_store import ProjectHandle, ProjectStore


class FakeProjectStore(ProjectStore):
    """
    Project store that keeps the project manifests in memory.
    Behaves like the Radiant Tcl shell when it comes to the working directory: opening or
    creating a project moves the working directory (of this process) to the project directory.
    """

    def __init__(self):
        self.manifests = {}
        self.devices = {}
        self.calls = []
        self.add_calls = []
        self.save_count = 0
        self.close_count = 0

        # Paths that fail to be added with something else than an "already added" error.
        self.broken_paths = set()
        self.broken_steps = set()

    def open(self, descriptor):
        self.calls.append(("open", str(descriptor)))

        descriptor = Path(descriptor).resolve()
        if not descriptor.exists():
            raise ToolCommandError(command="open", message=f"{descriptor} not found")

        os.chdir(descriptor.parent)
        self.manifests.setdefault(descriptor, [])

        return ProjectHandle(name=descriptor.stem, descriptor=descriptor)

    def create(self, name, impl, device, performance, synthesis):
        self.calls.append(("create", name, impl, device, performance, synthesis))

        descriptor = Path.cwd() / f"{name}.rdf"
        descriptor.write_text("fake project\n", encoding="utf-8")
        self.manifests[descriptor] = []
        self.devices[descriptor] = (device, performance)

        return ProjectHandle(name=name, descriptor=descriptor)

    def add_source(self, handle, path):
        handle.check_open()
        self.add_calls.append(str(path))

        if str(path) in self.broken_paths:
            raise SourceAddError(command="add_source", message=f"cannot find {path}")

        manifest = self.manifests[handle.descriptor]
        if str(path) in manifest:
            raise DuplicateMemberError(path=str(path))

        manifest.append(str(path))

    def set_device_part(self, handle, device, performance):
        handle.check_open()
        self.calls.append(("set_device_part", device, performance))
        self.devices[handle.descriptor] = (device, performance)

    def run_step(self, handle, step, impl):
        handle.check_open()
        self.calls.append(("run_step", step, impl))

        if step in self.broken_steps:
            raise ToolCommandError(command=step, message=f"{step} failed")

    def evaluate(self, handle, script):
        handle.check_open()
        self.calls.append(("evaluate", script))

        if script.startswith("error"):
            raise ToolCommandError(command=script, message=script)

        return f"result of {script}"

    def save(self, handle):
        handle.check_open()
        self.calls.append(("save",))
        self.save_count += 1

    def close(self, handle):
        handle.check_open()
        handle.is_open = False
        self.calls.append(("close",))
        self.close_count += 1

    def get_working_directory(self):
        return Path.cwd()

    def change_directory(self, path):
        os.chdir(path)

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_store(tmp_path, monkeypatch):
    # The store changes directory, make sure it is changed back after the test.
    monkeypatch.chdir(tmp_path)
    return FakeProjectStore()


def create_descriptor(directory, project_name):
    directory.mkdir(parents=True, exist_ok=True)
    descriptor = directory / f"{project_name}.rdf"
    descriptor.write_text("fake project\n", encoding="utf-8")

    return descriptor
