from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from contact_sheet.config import SummaryConfig
from contact_sheet.service import (
    SummaryStatus,
    build_ffmpeg_command,
    generate_summary,
    process_directory,
)


class FakeRunner:
    """Records commands and writes the output file like ffmpeg would."""

    def __init__(self, fail_for: tuple[str, ...] = ()) -> None:
        self.commands: list[list[str]] = []
        self.fail_for = fail_for

    def __call__(self, command, *, check: bool, capture_output: bool):
        self.commands.append(list(command))
        if any(name in Path(command[2]).name for name in self.fail_for):
            raise subprocess.CalledProcessError(1, command, output=b"", stderr=b"moov atom not found\n")
        Path(command[-1]).write_bytes(b"\xff\xd8\xff")
        return subprocess.CompletedProcess(command, 0, stdout=b"", stderr=b"")

    @property
    def inputs(self) -> list[str]:
        return [Path(command[2]).name for command in self.commands]


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


def _scenario(tmp_path: Path) -> Path:
    root = tmp_path / "a"
    _touch(root / "video1.mp4")
    _touch(root / "b" / "video2.mkv")
    _touch(root / "readme.txt")
    return root


def test_build_ffmpeg_command() -> None:
    config = SummaryConfig(interval_seconds=20, tile="4x3", ffmpeg_bin="/usr/bin/ffmpeg")
    command = build_ffmpeg_command(Path("/v/My \"Clip\".mp4"), Path("/v/My \"Clip\"_summary.jpg"), config)
    assert command == [
        "/usr/bin/ffmpeg",
        "-i",
        "/v/My \"Clip\".mp4",
        "-vf",
        "select='lte(t,750)*not(mod(t,20))',scale=320:-1,tile=4x3",
        "-frames:v",
        "1",
        "/v/My \"Clip\"_summary.jpg",
    ]


def test_generate_summary_ignores_non_video(tmp_path: Path) -> None:
    runner = FakeRunner()
    result = generate_summary(_touch(tmp_path / "notes.txt"), SummaryConfig(), runner=runner)
    assert result.status is SummaryStatus.IGNORED
    assert runner.commands == []


def test_generate_summary_creates_output(tmp_path: Path, caplog) -> None:
    video = _touch(tmp_path / "Movie.MKV")
    runner = FakeRunner()
    with caplog.at_level(logging.INFO):
        result = generate_summary(video, SummaryConfig(), runner=runner)
    assert result.status is SummaryStatus.CREATED
    assert result.output_path == tmp_path / "Movie_summary.jpg"
    assert result.output_path.exists()
    assert f"Thumbnail created: {result.output_path}" in caplog.text


def test_existing_output_is_skipped_regardless_of_content(tmp_path: Path, caplog) -> None:
    video = _touch(tmp_path / "clip.mp4")
    (tmp_path / "clip_summary.jpg").write_bytes(b"")
    runner = FakeRunner()
    with caplog.at_level(logging.DEBUG, logger="contact_sheet.service.summary_service"):
        result = generate_summary(video, SummaryConfig(tile="2x2"), runner=runner)
    assert result.status is SummaryStatus.SKIPPED
    assert runner.commands == []
    assert any(
        record.levelno == logging.DEBUG and "Skipping" in record.getMessage() for record in caplog.records
    )


def test_failed_command_is_logged_and_not_raised(tmp_path: Path, caplog) -> None:
    video = _touch(tmp_path / "broken.mp4")
    runner = FakeRunner(fail_for=("broken",))
    with caplog.at_level(logging.ERROR):
        result = generate_summary(video, SummaryConfig(), runner=runner)
    assert result.status is SummaryStatus.FAILED
    assert "moov atom not found" in (result.error or "")
    assert str(video) in caplog.text


def test_spawn_failure_is_reported(tmp_path: Path) -> None:
    video = _touch(tmp_path / "clip.mp4")

    def missing_binary(command, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", command[0])

    result = generate_summary(video, SummaryConfig(ffmpeg_bin="no-such-ffmpeg"), runner=missing_binary)
    assert result.status is SummaryStatus.FAILED
    assert not (tmp_path / "clip_summary.jpg").exists()


def test_process_directory_scenario(tmp_path: Path) -> None:
    root = _scenario(tmp_path)
    runner = FakeRunner()
    report = process_directory(root, SummaryConfig(), runner=runner)

    assert sorted(runner.inputs) == ["video1.mp4", "video2.mkv"]
    assert (root / "video1_summary.jpg").exists()
    assert (root / "b" / "video2_summary.jpg").exists()
    assert not (root / "readme_summary.jpg").exists()
    assert (report.created, report.skipped, report.failed) == (2, 0, 0)


def test_existing_summary_skips_only_that_video(tmp_path: Path) -> None:
    root = _scenario(tmp_path)
    (root / "video1_summary.jpg").write_bytes(b"old")
    runner = FakeRunner()
    report = process_directory(root, SummaryConfig(), runner=runner)

    assert runner.inputs == ["video2.mkv"]
    assert (root / "video1_summary.jpg").read_bytes() == b"old"
    assert (report.created, report.skipped) == (1, 1)


def test_second_run_dispatches_nothing(tmp_path: Path) -> None:
    root = _scenario(tmp_path)
    process_directory(root, SummaryConfig(), runner=FakeRunner())

    second = FakeRunner()
    report = process_directory(root, SummaryConfig(interval_seconds=10, tile="3x3"), runner=second)
    assert second.commands == []
    assert (report.created, report.skipped, report.failed) == (0, 2, 0)


def test_failure_does_not_stop_the_walk(tmp_path: Path) -> None:
    root = _scenario(tmp_path)
    _touch(root / "b" / "broken.mp4")
    runner = FakeRunner(fail_for=("broken",))
    report = process_directory(root, SummaryConfig(), runner=runner)

    assert sorted(runner.inputs) == ["broken.mp4", "video1.mp4", "video2.mkv"]
    assert report.failed_paths == [root / "b" / "broken.mp4"]
    assert report.created == 2


def test_unsearchable_directory_fails_file_and_walk_continues(monkeypatch, tmp_path: Path, caplog) -> None:
    root = tmp_path / "a"
    noexec = root / "noexec"
    clip = _touch(noexec / "clip.mp4")
    _touch(root / "z_video3.mp4")

    real_lstat = os.lstat

    def fake_lstat(path, *args, **kwargs):
        if Path(path).parent == noexec:
            raise PermissionError(13, "Permission denied", str(path))
        return real_lstat(path, *args, **kwargs)

    monkeypatch.setattr("contact_sheet.service.summary_service.os.lstat", fake_lstat)
    runner = FakeRunner()
    with caplog.at_level(logging.ERROR):
        report = process_directory(root, SummaryConfig(), runner=runner)

    assert runner.inputs == ["z_video3.mp4"]
    assert report.failed_paths == [clip]
    assert report.created == 1
    assert str(clip) in caplog.text


def test_dangling_symlink_output_counts_as_existing(tmp_path: Path) -> None:
    video = _touch(tmp_path / "clip.mp4")
    (tmp_path / "clip_summary.jpg").symlink_to(tmp_path / "gone.jpg")
    runner = FakeRunner()
    result = generate_summary(video, SummaryConfig(), runner=runner)
    assert result.status is SummaryStatus.SKIPPED
    assert runner.commands == []


def test_unreadable_subdirectory_does_not_block_siblings(monkeypatch, tmp_path: Path, caplog) -> None:
    root = tmp_path / "a"
    locked = root / "locked"
    _touch(locked / "hidden.mp4")
    _touch(root / "video3.mp4")

    real_scandir = os.scandir

    def fake_scandir(path):
        if Path(path) == locked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr("contact_sheet.data.video_loader.os.scandir", fake_scandir)
    runner = FakeRunner()
    with caplog.at_level(logging.ERROR):
        report = process_directory(root, SummaryConfig(), runner=runner)

    assert runner.inputs == ["video3.mp4"]
    assert report.created == 1
    assert str(locked) in caplog.text


def test_verbose_logs_plan_and_command(monkeypatch, tmp_path: Path, caplog) -> None:
    video = _touch(tmp_path / "clip.mp4")
    monkeypatch.setattr(
        "contact_sheet.service.summary_service.probe_duration_seconds", lambda path: 600.0
    )
    with caplog.at_level(logging.DEBUG, logger="contact_sheet.service.summary_service"):
        generate_summary(video, SummaryConfig(verbose=True), runner=FakeRunner())
    assert "Planned 20 of 25 tiles" in caplog.text
    assert "Running: ffmpeg -i" in caplog.text
