import os

from domains.screenshot_sort.latest import (
    LATEST_LINK,
    latest_partition,
    max_numeric_subdir,
    update_latest,
)


def make_partitions(root, *partitions):
    for partition in partitions:
        (root / partition).mkdir(parents=True)


def test_max_numeric_subdir_ignores_files_and_names(tmp_path):
    make_partitions(tmp_path, "2021", "2023", "other", "abc12")
    (tmp_path / "9999").write_text("a file, not a partition")

    assert max_numeric_subdir(tmp_path) == 2023


def test_max_numeric_subdir_of_missing_directory_is_zero(tmp_path):
    assert max_numeric_subdir(tmp_path / "nope") == 0


def test_latest_follows_the_newest_branch(tmp_path):
    make_partitions(tmp_path, "2022/01/01", "2023/12/31", "2023/01/05", "2022/12/31")

    year, month, day, day_path = latest_partition(tmp_path)

    assert (year, month, day) == (2023, 12, 31)
    assert day_path == tmp_path / "2023" / "12" / "31"


def test_latest_ignores_larger_siblings_in_other_branches(tmp_path):
    make_partitions(tmp_path, "2023/12/01", "2023/01/31", "2022/12/31")

    assert update_latest(tmp_path) == tmp_path / "2023" / "12" / "01"


def test_update_latest_creates_symlink(tmp_path, log_records):
    make_partitions(tmp_path, "2022/01/01", "2023/12/31", "2023/01/05")

    update_latest(tmp_path)

    latest = tmp_path / LATEST_LINK
    assert latest.is_symlink()
    assert latest.resolve() == (tmp_path / "2023" / "12" / "31").resolve()
    assert any(r["level"].name == "SUCCESS" for r in log_records)


def test_update_latest_replaces_existing_symlink(tmp_path):
    make_partitions(tmp_path, "2023/01/05")
    update_latest(tmp_path)
    make_partitions(tmp_path, "2024/02/01")

    update_latest(tmp_path)

    latest = tmp_path / LATEST_LINK
    assert latest.is_symlink()
    assert latest.resolve() == (tmp_path / "2024" / "02" / "01").resolve()


def test_update_latest_replaces_dangling_symlink(tmp_path):
    make_partitions(tmp_path, "2023/01/05")
    os.symlink(tmp_path / "gone", tmp_path / LATEST_LINK)

    update_latest(tmp_path)

    assert (tmp_path / LATEST_LINK).resolve() == (tmp_path / "2023" / "01" / "05").resolve()


def test_empty_root_only_warns(tmp_path, log_records):
    assert update_latest(tmp_path) is None

    assert not os.path.lexists(tmp_path / LATEST_LINK)
    assert [r for r in log_records if r["level"].name == "WARNING"]


def test_other_bucket_only_root_only_warns(tmp_path, log_records):
    make_partitions(tmp_path, "other")
    (tmp_path / "other" / "random.png").write_text("x")

    assert update_latest(tmp_path) is None
    assert not os.path.lexists(tmp_path / LATEST_LINK)


def test_stale_link_is_removed_when_target_missing(tmp_path):
    make_partitions(tmp_path, "2023/01/05")
    update_latest(tmp_path)
    (tmp_path / LATEST_LINK).resolve().rmdir()

    assert update_latest(tmp_path) is None
    assert not os.path.lexists(tmp_path / LATEST_LINK)


def test_regular_file_named_latest_is_never_touched(tmp_path, log_records):
    make_partitions(tmp_path, "2023/01/05")
    (tmp_path / LATEST_LINK).write_text("user data")

    assert update_latest(tmp_path) is None

    latest = tmp_path / LATEST_LINK
    assert not latest.is_symlink()
    assert latest.read_text() == "user data"
    assert any(
        "not a symlink" in r["message"] for r in log_records if r["level"].name == "WARNING"
    )


def test_directory_named_latest_is_never_touched(tmp_path):
    make_partitions(tmp_path, "2023/01/05", "latest/keep")

    assert update_latest(tmp_path) is None
    assert (tmp_path / LATEST_LINK / "keep").is_dir()
