# --------------------------------------------------------------------------------------------------
# Copyright (c) Lukas Vik. All rights reserved.
#
# This file is part of the hdl-radiant project, build automation for Lattice Radiant
# FPGA projects.
# --------------------------------------------------------------------------------------------------

from pathlib import Path

import pytest

from hdl_radiant.file_collector import collect, rebase


def create_files(root, *paths):
    for path in paths:
        file = root / path
        file.parent.mkdir(parents=True, exist_ok=True)
        file.write_text("", encoding="utf-8")


@pytest.fixture
def tree(tmp_path):
    create_files(tmp_path, "a.v", "b.ipx", "lib/c.v")
    return tmp_path


def test_depth_one_finds_files_in_root_and_subdirectory(tree):
    result = collect(root=tree, patterns=["*.v"], depth=1)

    assert len(result) == 2
    assert set(result) == {tree / "a.v", tree / "lib" / "c.v"}


def test_depth_zero_does_not_descend(tree):
    assert collect(root=tree, patterns=["*.ipx"], depth=0) == [tree / "b.ipx"]
    assert collect(root=tree, patterns=["*.v"], depth=0) == [tree / "a.v"]


def test_default_patterns_are_ipx_files(tree):
    assert collect(root=tree) == [tree / "b.ipx"]


def test_single_pattern_string_is_one_pattern(tree):
    assert collect(root=tree, patterns="*.v", depth=0) == [tree / "a.v"]
    assert collect(root=tree, patterns="*.v", depth=1) == [tree / "a.v", tree / "lib" / "c.v"]


def test_files_of_root_are_listed_before_files_of_subdirectories(tmp_path):
    create_files(tmp_path, "sub_a/x.v", "sub_b/y.v", "z.v")

    result = collect(root=tmp_path, patterns=["*.v"], depth=1)

    assert result[0] == tmp_path / "z.v"
    assert set(result[1:]) == {tmp_path / "sub_a" / "x.v", tmp_path / "sub_b" / "y.v"}


def test_result_is_in_pattern_order(tree):
    assert collect(root=tree, patterns=["*.ipx", "*.v"], depth=0) == [tree / "b.ipx", tree / "a.v"]
    assert collect(root=tree, patterns=["*.v", "*.ipx"], depth=0) == [tree / "a.v", tree / "b.ipx"]


def test_duplicate_patterns_give_duplicate_entries(tree):
    result = collect(root=tree, patterns=["*.v", "*.v"], depth=1)

    assert len(result) == 4
    assert result.count(tree / "a.v") == 2
    assert result.count(tree / "lib" / "c.v") == 2


def test_overlapping_patterns_give_duplicate_entries(tree):
    result = collect(root=tree, patterns=["*.v", "a.*"], depth=0)

    assert result == [tree / "a.v", tree / "a.v"]


@pytest.mark.parametrize("depth", [0, 1, 2, 3, 4, 5])
def test_search_does_not_go_deeper_than_depth(tmp_path, depth):
    create_files(tmp_path, "0.v", "d1/1.v", "d1/d2/2.v", "d1/d2/d3/3.v", "d1/d2/d3/d4/4.v")

    result = collect(root=tmp_path, patterns=["*.v"], depth=depth)

    expected_levels = range(min(depth, 4) + 1)
    assert sorted(path.name for path in result) == [f"{level}.v" for level in expected_levels]


def test_only_matching_regular_files_are_returned(tmp_path):
    create_files(tmp_path, "a.v", "a.vhd", "a.v.bak", "dir.v/inner.v")

    result = collect(root=tmp_path, patterns=["*.v"], depth=1)

    # "dir.v" is a directory, so it is not listed, but it is searched.
    assert set(result) == {tmp_path / "a.v", tmp_path / "dir.v" / "inner.v"}


def test_matching_is_case_sensitive(tmp_path):
    create_files(tmp_path, "upper.V", "lower.v")

    assert collect(root=tmp_path, patterns=["*.v"], depth=0) == [tmp_path / "lower.v"]


def test_hidden_files_and_directories_are_skipped(tmp_path):
    create_files(tmp_path, ".hidden.v", ".git/objects/a.v", "visible.v")

    assert collect(root=tmp_path, patterns=["*.v"], depth=3) == [tmp_path / "visible.v"]


def test_hidden_files_are_found_by_pattern_that_starts_with_dot(tmp_path):
    create_files(tmp_path, ".hidden.v", "visible.v")

    assert collect(root=tmp_path, patterns=[".*.v"], depth=0) == [tmp_path / ".hidden.v"]


def test_missing_root_gives_empty_result(tmp_path):
    assert collect(root=tmp_path / "does_not_exist", patterns=["*.v"], depth=5) == []


def test_root_that_is_a_file_gives_empty_result(tree):
    assert collect(root=tree / "a.v", patterns=["*.v"], depth=5) == []


def test_empty_root_gives_empty_result(tmp_path):
    assert collect(root=tmp_path, patterns=["*.v"], depth=5) == []


def test_relative_root_gives_relative_paths(tree, monkeypatch):
    monkeypatch.chdir(tree)

    assert collect(root="lib", patterns=["*.v"], depth=0) == [Path("lib") / "c.v"]
    assert collect(root=Path("."), patterns=["*.ipx"], depth=0) == [Path("b.ipx")]


def test_same_file_system_state_gives_same_result(tmp_path):
    create_files(tmp_path, "a.v", "x/b.v", "x/y/c.v", "z/d.v")

    first = collect(root=tmp_path, patterns=["*.v"], depth=3)
    second = collect(root=tmp_path, patterns=["*.v"], depth=3)

    assert first == second
    assert len(first) == 4


def test_rebase_replaces_start_of_paths():
    result = rebase(["/work/proj/lib/a.v", "/work/proj/b.v"], cut_prefix="/work/proj")

    assert result == ["lib/a.v", "b.v"]


def test_rebase_adds_prefix():
    result = rebase(["/work/proj/lib/a.v"], cut_prefix="/work/proj", add_prefix="../")

    assert result == ["../lib/a.v"]


def test_rebase_accepts_path_objects():
    assert rebase([Path("/a/b/c.v")], cut_prefix=Path("/a")) == ["b/c.v"]


def test_rebase_does_not_check_that_prefix_matches():
    # The length of the prefix, plus the separator, is cut regardless of the content.
    assert rebase(["/other/x/a.v"], cut_prefix="/work") == ["/x/a.v"]


def test_rebase_of_collected_files(tree):
    result = rebase(collect(root=tree / "lib", patterns=["*.v"], depth=0), cut_prefix=tree)

    assert result == ["lib/c.v"]
