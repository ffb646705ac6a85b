import os
from urllib.parse import quote, quote_plus

import pytest

from httpserve.http_utils import (
    UPLOAD_FILENAME_PREFIX,
    GenerateFilenameError,
    base_unescaper,
    dump_arg_map,
    dump_header_map,
    generate_random_upload_filename,
    http_unescape,
    load_file,
    standardize_url,
    tokenize_url,
)


def test_tokenize_url():
    assert tokenize_url("/path/to/resource") == ["path", "to", "resource"]


def test_tokenize_url_ignores_extra_slashes():
    assert tokenize_url("//path///to/resource/") == tokenize_url("/path/to/resource")


def test_standardize_url_collapses_and_strips():
    assert standardize_url("//path///to/resource/") == "/path/to/resource"


def test_standardize_url_keeps_root():
    assert standardize_url("/") == "/"
    assert standardize_url("///") == "/"


@pytest.mark.parametrize("url", ["/a//b/", "a/b", "//x", "/path/to/resource"])
def test_standardize_url_is_idempotent(url):
    once = standardize_url(url)
    assert standardize_url(once) == once
    assert "//" not in once


def test_generate_upload_filename_creates_empty_file(tmp_path):
    path = generate_random_upload_filename(str(tmp_path))
    assert os.path.isfile(path)
    assert os.path.getsize(path) == 0
    assert os.path.dirname(path) == str(tmp_path)
    assert os.path.basename(path).startswith(UPLOAD_FILENAME_PREFIX)


def test_generate_upload_filename_is_unique(tmp_path):
    names = {generate_random_upload_filename(str(tmp_path)) for _ in range(20)}
    assert len(names) == 20


def test_generate_upload_filename_missing_directory(tmp_path):
    with pytest.raises(GenerateFilenameError):
        generate_random_upload_filename(str(tmp_path / "missing"))


@pytest.mark.parametrize("text", ["hello world", "a&b=c", "caffè", "100% sure", "x+y"])
def test_unescape_round_trips_quote_plus(text):
    assert http_unescape(quote_plus(text)) == text


@pytest.mark.parametrize("text", ["a b/c", "ünï", "%"])
def test_unescape_round_trips_quote(text):
    assert http_unescape(quote(text)) == text


def test_plus_becomes_space():
    assert http_unescape("a+b") == "a b"


@pytest.mark.parametrize("text", ["100%", "%4", "%zz", "abc%"])
def test_malformed_escapes_kept(text):
    assert http_unescape(text) == text


def test_unescape_empty():
    assert http_unescape("") == ""


def test_unescape_bytes_preserves_type():
    assert http_unescape(b"a%20b") == b"a b"


def test_unescape_stops_at_nul():
    assert http_unescape("ab\0cd") == "ab"


def test_base_unescaper_uses_custom_function():
    calls = []

    def custom(value):
        calls.append(value)
        return value.upper()

    assert base_unescaper("a%20b", custom) == "A%20B"
    assert calls == ["a%20b"]


def test_base_unescaper_default():
    assert base_unescaper("a%20b") == http_unescape("a%20b")


def test_base_unescaper_skips_empty():
    calls = []
    assert base_unescaper("", calls.append) == ""
    assert calls == []


def test_load_file_round_trip(tmp_path):
    data = bytes(range(256))
    target = tmp_path / "data.bin"
    target.write_bytes(data)
    assert load_file(str(target)) == data


def test_load_file_missing(tmp_path):
    with pytest.raises(ValueError):
        load_file(str(tmp_path / "missing.bin"))


def test_dump_header_map_empty():
    assert dump_header_map("Headers", {}) == ""


def test_dump_header_map_format():
    assert dump_header_map("Headers", {"Host": "localhost"}) == '    Headers [Host:"localhost" ]\n'


def test_dump_arg_map_empty():
    assert dump_arg_map("Query Args", {}) == ""


def test_dump_arg_map_format():
    text = dump_arg_map("Query Args", {"a": ["1", "2"]})
    assert text == '    Query Args [a:["1", "2"] ]\n'


def test_dump_arg_map_lists_every_key():
    text = dump_arg_map("Args", {"k1": ["v"], "k2": []})
    assert text.startswith("    Args [")
    assert "k1:[" in text and "k2:[]" in text
    assert text.endswith("]\n")