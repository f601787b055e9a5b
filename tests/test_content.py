import pytest

import httpfacade
from httpfacade import ContentType


@pytest.mark.parametrize(
    "value, expected",
    [
        ("application/json", ContentType.JSON),
        ("Application/JSON; charset=utf-8", ContentType.JSON),
        ("application/x-www-form-urlencoded", ContentType.URL_ENCODED),
        ("multipart/form-data; boundary=xyz", ContentType.FORM_DATA),
        ("text/html", ContentType.HTML),
        ("text/plain", ContentType.TEXT),
        (ContentType.TEXT, ContentType.TEXT),
        ("application/xml", None),
        (None, None),
    ],
)
def test_parse(value, expected):
    assert ContentType.parse(value) is expected


def test_encode():
    body = httpfacade.Body({"a": 1, "html": "<p>hi</p>", "text": "hi"})
    assert ContentType.JSON.encode_body(body) == '{"a":1,"html":"<p>hi</p>","text":"hi"}'
    assert ContentType.URL_ENCODED.encode_body(body).startswith("a=1&html=%3Cp%3E")
    assert ContentType.FORM_DATA.encode_body(body) == body.to_form_data()
    assert ContentType.HTML.encode_body(body) == "<p>hi</p>"
    assert ContentType.TEXT.encode_body(body) == "hi"


def test_encode_missing_raw_field():
    assert ContentType.TEXT.encode_body(httpfacade.Body()) is None


@pytest.mark.parametrize("raw", ["", "not json", "{", "null", "42", '"text"'])
def test_decode_json_fallback(raw):
    assert ContentType.JSON.decode_payload(raw) == {}


def test_decode_json():
    assert ContentType.JSON.decode_payload('{"a": [1, 2]}') == {"a": [1, 2]}
    assert ContentType.JSON.decode_payload("[1, 2]") == [1, 2]


def test_decode_url_encoded():
    assert ContentType.URL_ENCODED.decode_payload("a=1&b=x+y") == {"a": "1", "b": "x y"}
    assert ContentType.URL_ENCODED.decode_payload("") == {}


def test_decode_form_data_is_single_string():
    assert ContentType.FORM_DATA.decode_payload("a=1&b=x+y%21") == "a=1&b=x y!"


def test_decode_raw_types():
    assert ContentType.HTML.decode_payload("<p>") == {"html": "<p>"}
    assert ContentType.TEXT.decode_payload("") == {"text": ""}


def test_members_render_as_media_type():
    assert str(ContentType.URL_ENCODED) == "application/x-www-form-urlencoded"
    assert f"Accept: {ContentType.JSON}" == "Accept: application/json"
    assert ContentType.JSON.encode("utf-8") == b"application/json"


def test_decode_json_too_deeply_nested():
    raw = "[" * 100000 + "]" * 100000
    assert ContentType.JSON.decode_payload(raw) == {}
