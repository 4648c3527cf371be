import pytest

from jenkins_matrix.status import (classify_color, resolve_previous_result, should_notify,
                                   status_label)
from jenkins_matrix.types import BuildRecord, Color, JobNotificationConfig, Result

ALL_RESULTS = [Result.SUCCESS, Result.UNSTABLE, Result.FAILURE, Result.NOT_BUILT,
               Result.ABORTED, None]

NOTHING = JobNotificationConfig(
    project="app",
    notify_aborted=False,
    notify_failure=False,
    notify_not_built=False,
    notify_back_to_normal=False,
    notify_success=False,
    notify_unstable=False,
)


def _build(previous: BuildRecord = None) -> BuildRecord:
    return BuildRecord(project="app", project_display_name="App", display_name="#2",
                       url="job/app/2/", result=Result.SUCCESS, previous_build=previous)


@pytest.mark.parametrize("result, color", [
    (Result.SUCCESS, Color.GREEN),
    (Result.FAILURE, Color.RED),
    (Result.UNSTABLE, Color.RED),
    (Result.ABORTED, Color.YELLOW),
    (Result.NOT_BUILT, Color.YELLOW),
    (None, Color.YELLOW),
])
def test_classify_color(result, color) -> None:
    assert classify_color(result) == color


def test_classify_color_unknown_result_is_yellow() -> None:
    assert classify_color(Result("SKIPPED")) == Color.YELLOW


@pytest.mark.parametrize("result, flag", [
    (Result.ABORTED, "notify_aborted"),
    (Result.FAILURE, "notify_failure"),
    (Result.NOT_BUILT, "notify_not_built"),
    (Result.SUCCESS, "notify_success"),
    (Result.UNSTABLE, "notify_unstable"),
])
def test_should_notify_follows_flag(result, flag) -> None:
    enabled = JobNotificationConfig(**{**NOTHING.flags, flag: True}, project="app")
    assert should_notify(result, Result.SUCCESS, enabled)
    assert not should_notify(result, Result.SUCCESS, NOTHING)


def test_should_notify_only_enabled_result() -> None:
    config = JobNotificationConfig(**{**NOTHING.flags, "notify_failure": True}, project="app")
    notified = [result for result in ALL_RESULTS
                if should_notify(result, Result.SUCCESS, config)]
    assert notified == [Result.FAILURE]


@pytest.mark.parametrize("notify_success", [True, False])
def test_back_to_normal_ignores_success_flag(notify_success) -> None:
    on = JobNotificationConfig(**{**NOTHING.flags, "notify_back_to_normal": True,
                                  "notify_success": notify_success}, project="app")
    off = JobNotificationConfig(**{**NOTHING.flags, "notify_back_to_normal": False}, project="app")
    assert should_notify(Result.SUCCESS, Result.FAILURE, on)
    assert not should_notify(Result.SUCCESS, Result.FAILURE, off)


def test_back_to_normal_only_after_failure() -> None:
    config = JobNotificationConfig(**{**NOTHING.flags, "notify_back_to_normal": True},
                                   project="app")
    assert not should_notify(Result.SUCCESS, Result.UNSTABLE, config)
    assert not should_notify(Result.SUCCESS, Result.SUCCESS, config)


def test_first_build_is_never_back_to_normal() -> None:
    build = _build()
    previous_result = resolve_previous_result(build)
    assert previous_result == Result.SUCCESS
    config = JobNotificationConfig(**{**NOTHING.flags, "notify_back_to_normal": True},
                                   project="app")
    assert not should_notify(build.result, previous_result, config)
    assert status_label(build.result, previous_result, False) == "successful"


def test_resolve_previous_result_uses_previous_build() -> None:
    previous = BuildRecord(project="app", project_display_name="App", display_name="#1",
                           url="job/app/1/", result=Result.FAILURE)
    assert resolve_previous_result(_build(previous)) == Result.FAILURE


@pytest.mark.parametrize("result, label", [
    (Result.SUCCESS, "successful"),
    (Result.FAILURE, "failed"),
    (Result.ABORTED, "aborted"),
    (Result.NOT_BUILT, "Not built"),
    (Result.UNSTABLE, "unstable"),
    (None, "Unknown"),
])
def test_status_label(result, label) -> None:
    assert status_label(result, Result.SUCCESS, False) == label


def test_status_label_back_to_normal_wins_over_success() -> None:
    assert status_label(Result.SUCCESS, Result.FAILURE, False) == "Back to normal"


@pytest.mark.parametrize("result", ALL_RESULTS)
def test_status_label_building(result) -> None:
    assert status_label(result, Result.FAILURE, True) == "Starting..."
