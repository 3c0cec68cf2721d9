from reconv.extensions import unwrap_or_empty_string, unwrap_or_value
from reconv.options import ArgsType, AudioCodec
from reconv.setup_types import AudioCodec as AudioChoice


def test_empty_string_for_none():
    assert unwrap_or_empty_string(None) == ""


def test_string_of_value():
    assert unwrap_or_empty_string(10000) == "10000"
    assert unwrap_or_empty_string(AudioCodec.IPCM) == "pcm_s24be"


def test_zero_is_not_treated_as_missing():
    assert unwrap_or_empty_string(0) == "0"
    assert unwrap_or_value(0, 5) == 0


def test_default_for_none():
    default = ArgsType.match_source()
    assert unwrap_or_value(None, default, ArgsType.custom) is default


def test_convert_applied():
    assert unwrap_or_value(10000, ArgsType.match_source(), ArgsType.custom) == ArgsType.custom(
        10000
    )


def test_choice_conversion():
    result = unwrap_or_value(AudioChoice.AAC, ArgsType.match_source(), AudioChoice.to_args)
    assert result == ArgsType.custom(AudioCodec.AAC)


def test_identity_without_convert():
    assert unwrap_or_value("mkv", "mp4") == "mkv"