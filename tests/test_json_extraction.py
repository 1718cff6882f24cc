import pytest

from colorsense.core.errors import ResponseFormatError
from colorsense.core.json_extraction import JsonKind, extract_json


def test_object_wrapped_in_prose_is_extracted():
    text = (
        'Here is the answer:\n{"colorName":"Red","hexCode":"#FF0000","description":"pure red"}\n'
        "Hope that helps!"
    )
    assert extract_json(text, JsonKind.OBJECT) == {
        "colorName": "Red",
        "hexCode": "#FF0000",
        "description": "pure red",
    }


def test_object_inside_code_fence():
    text = '```json\n{"valid": true, "reason": "a color"}\n```'
    assert extract_json(text) == {"valid": True, "reason": "a color"}


def test_array_kind_uses_square_brackets():
    text = 'Sure! [{"colorName": "Sage"}, {"colorName": "Clay"}] Enjoy.'
    assert extract_json(text, JsonKind.ARRAY) == [{"colorName": "Sage"}, {"colorName": "Clay"}]


def test_scalar_without_brackets_is_rejected():
    with pytest.raises(ResponseFormatError):
        extract_json("true", JsonKind.OBJECT)


def test_kind_mismatch_is_a_format_error():
    with pytest.raises(ResponseFormatError):
        extract_json('{"colorName": "Red"}', JsonKind.ARRAY)


@pytest.mark.parametrize("text", ["", None, "no json at all", '{"colorName": ', "} backwards {"])
def test_malformed_output_raises_format_error(text):
    with pytest.raises(ResponseFormatError) as excinfo:
        extract_json(text, JsonKind.OBJECT)
    assert str(excinfo.value) == "Invalid response format from AI"


def test_raw_text_never_leaks_into_error(caplog):
    secret = "{not json but provider says SECRET-DETAIL}"
    with pytest.raises(ResponseFormatError) as excinfo:
        extract_json(secret)
    assert "SECRET-DETAIL" not in str(excinfo.value)
    assert "SECRET-DETAIL" in caplog.text


def test_deeply_nested_output_is_a_format_error():
    with pytest.raises(ResponseFormatError):
        extract_json("[" * 100000 + "]" * 100000, JsonKind.ARRAY)
