import pytest

from exiftool_tools import exceptions, parser, tags
from exiftool_tools.executor import Result


def test_parse_version():
    assert parser.parse_version(Result("9.36\n", 0)) == "9.36"
    assert parser.parse_version(Result("  12.40  \r\n", 0)) == "12.40"


def test_parse_version_fails():
    with pytest.raises(exceptions.ExecutionError):
        parser.parse_version(Result("9.36", 1))

    with pytest.raises(exceptions.ExecutionError):
        parser.parse_version(Result("", 0))

    with pytest.raises(exceptions.ExecutionError):
        parser.parse_version(Result("command not found", 0))


def test_version_tuple():
    assert parser.version_tuple("9.36") == (9, 36)
    assert parser.version_tuple("12.40") > parser.version_tuple("8.36")
    assert parser.version_tuple("8.4") < parser.version_tuple("8.36")
    with pytest.raises(ValueError):
        parser.version_tuple("abc")


def test_parse_tags():
    output = "\n".join(
        [
            "Make: Canon",
            "Model: Canon EOS 5D Mark III",
            "GPSLatitude: 48.8577",
            "DateTimeOriginal: 2015:06:30 10:15:00",
        ]
    )
    meta = parser.parse_tags(
        Result(output, 0),
        [tags.MAKE, tags.MODEL, tags.GPS_LATITUDE, tags.DATE_TIME_ORIGINAL],
    )
    assert dict(meta) == {
        tags.MAKE: "Canon",
        tags.MODEL: "Canon EOS 5D Mark III",
        tags.GPS_LATITUDE: "48.8577",
        tags.DATE_TIME_ORIGINAL: "2015:06:30 10:15:00",
    }


def test_parse_tags_skips_unmatched_lines():
    output = "\n".join(
        [
            "======== /tmp/image.jpg",
            "Warning: [minor] Unrecognized MakerNotes",
            "",
            "Make : Canon",
            "Software: GIMP",
            "NotATag: foo",
        ]
    )
    meta = parser.parse_tags(Result(output, 0), [tags.MAKE, tags.MODEL])
    # Software is known but was not requested; Model is requested but absent
    assert dict(meta) == {tags.MAKE: "Canon"}


def test_parse_tags_is_read_only():
    meta = parser.parse_tags(Result("Make: Canon\n", 0), [tags.MAKE])
    with pytest.raises(TypeError):
        meta[tags.MODEL] = "foo"  # type: ignore


def test_parse_tags_fails():
    with pytest.raises(exceptions.ExecutionError) as exc_info:
        parser.parse_tags(Result("", 1, error="Error: File not found"), [tags.MAKE])
    assert "File not found" in str(exc_info.value)
    assert exc_info.value.result.exit_status == 1


def test_parse_values():
    values = parser.parse_values(
        {
            tags.MAKE: "Canon",
            tags.ISO: "200",
            tags.EXPOSURE_TIME: "1/125",
            tags.ORIENTATION: "Horizontal (normal)",
        }
    )
    assert values == {
        tags.MAKE: "Canon",
        tags.ISO: 200,
        tags.EXPOSURE_TIME: 0.008,
        # Human readable value kept as is
        tags.ORIENTATION: "Horizontal (normal)",
    }


def test_parse_tags_keeps_value_whitespace():
    output = "\n".join(["Artist:   Jane  ", "Make:Canon", "Model: "])
    meta = parser.parse_tags(Result(output, 0), [tags.ARTIST, tags.MAKE, tags.MODEL])
    assert dict(meta) == {tags.ARTIST: "  Jane  ", tags.MAKE: "Canon", tags.MODEL: ""}
