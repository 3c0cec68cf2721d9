import pytest

from reconv.errors import (
    ConverterError,
    ConverterHasNoTaskAvailable,
    CopyError,
    CouldNotCreateDir,
    CreateSignalFailed,
    DoneSignalFailed,
    FfmpegError,
    NotExistingInputOutputDir,
    ProgressError,
    ProgressTrackerError,
    ReadDirError,
    SinkerError,
    SorterError,
    UpdateSignalFailed,
    WrongDatetimeError,
)


def test_not_existing_dir_message():
    assert str(NotExistingInputOutputDir()) == "Input or Output dir are invalid"


def test_no_task_message():
    assert str(ConverterHasNoTaskAvailable()) == "Internal Error"


@pytest.mark.parametrize(
    "cls", [CouldNotCreateDir, CopyError, ReadDirError, FfmpegError, SinkerError]
)
def test_string_errors_keep_message(cls):
    err = cls("boom here")
    assert str(err) == "boom here"
    assert isinstance(err, ConverterError)


def test_sorter_default_message():
    assert str(SorterError()) == "io"


def test_wrong_datetime_message():
    err = WrongDatetimeError()
    assert str(err) == "wrong datetime"
    assert isinstance(err, SorterError)


def test_sinker_from_sorter_keeps_message():
    wrapped = SinkerError.from_sorter(WrongDatetimeError())
    assert str(wrapped) == "wrong datetime"
    assert isinstance(wrapped.__cause__, WrongDatetimeError)


def test_update_signal_failed_message():
    err = UpdateSignalFailed("a.mp4", "241106B")
    text = str(err)
    assert text.startswith("Update signal failed at ")
    assert "a.mp4" in text and "[241106B]" in text
    assert err.file == "a.mp4"
    assert err.folder == "241106B"


def test_create_and_done_signal_messages():
    create = CreateSignalFailed("241106B")
    done = DoneSignalFailed("241106B")
    assert str(create).startswith("Create signal failed at ")
    assert str(create).endswith("241106B")
    assert str(done).startswith("Done signal failed at ")
    assert str(done).endswith("241106B")
    assert isinstance(create, ProgressError)
    assert isinstance(done, ProgressError)


def test_progress_tracker_error_uses_cause_message():
    cause = DoneSignalFailed("241104A")
    err = ProgressTrackerError(cause)
    assert str(err) == str(cause)
    assert err.cause is cause


def test_wrapped_sorter_error_is_catchable_as_base():
    wrapped = SinkerError.from_sorter(SorterError())
    assert str(wrapped) == "io"
    with pytest.raises(ConverterError, match="^io$"):
        raise wrapped