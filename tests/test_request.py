import pytest

from httpserve.file_info import FileInfo
from httpserve.request import HttpRequest


def test_method_is_upper_cased():
    assert HttpRequest(method="post").method == "POST"


def test_header_lookup_ignores_case():
    request = HttpRequest(headers={"Content-Type": "text/plain"})
    assert request.header("content-type") == "text/plain"
    assert request.header("Missing") == ""


def test_footer_and_cookie_lookup():
    request = HttpRequest(footers=[("X-Trail", "done")], cookies={"session": "token"})
    assert request.footer("x-trail") == "done"
    assert request.cookie("SESSION") == "token"
    assert request.cookie("other") == ""


def test_headers_property_is_a_copy():
    request = HttpRequest(headers={"Host": "localhost"})
    headers = request.headers
    headers["Host"] = "changed"
    assert request.header("Host") == "localhost"


def test_arg_values_are_unescaped():
    request = HttpRequest(query_args=[("q", "a+b%20c")])
    assert request.arg("q") == ["a b c"]


def test_arg_keeps_all_values_in_order():
    request = HttpRequest(query_args=[("k", "one"), ("k", "two")])
    assert request.arg("k") == ["one", "two"]
    assert request.arg("absent") == []


def test_arg_none_value_becomes_empty():
    request = HttpRequest(query_args=[("flag", None)])
    assert request.arg("flag") == [""]


def test_args_are_sorted_by_name():
    request = HttpRequest(query_args=[("b", "2"), ("a", "1"), ("b", "3")])
    assert request.args() == {"a": ["1"], "b": ["2", "3"]}
    assert list(request.args()) == ["a", "b"]


def test_args_flat_takes_first_value():
    request = HttpRequest(query_args=[("b", "2"), ("a", "1"), ("b", "3")])
    assert request.args_flat() == {"a": "1", "b": "2"}


def test_arg_names_are_case_sensitive():
    request = HttpRequest(query_args=[("Key", "v")])
    assert request.arg("key") == []
    assert request.arg("Key") == ["v"]


def test_custom_unescaper_is_used():
    request = HttpRequest(query_args=[("q", "a+b")], unescaper=lambda value: value[::-1])
    assert request.arg("q") == ["b+a"]


def test_arg_flat_is_raw_until_args_are_unescaped():
    request = HttpRequest(query_args=[("q", "a+b")])
    assert request.arg_flat("q") == "a+b"
    request.args()
    assert request.arg_flat("q") == "a b"
    assert request.arg_flat("missing") == ""


def test_querystring_rebuilds_arguments():
    request = HttpRequest(query_args=[("a", "1"), ("b", None)])
    assert request.querystring() == "?a=1&b="


def test_querystring_empty_without_arguments():
    assert HttpRequest().querystring() == ""


def test_grow_last_arg_extends_last_value():
    request = HttpRequest(query_args=[("k", "x"), ("k", "y")])
    request.args()
    request.grow_last_arg("k", "z")
    assert request.arg("k") == ["x", "yz"]


def test_grow_last_arg_creates_key():
    request = HttpRequest()
    request.grow_last_arg("new", "value")
    assert request.arg("new") == ["value"]
    assert request.args_flat() == {"new": "value"}


def test_get_or_create_file_info_returns_same_record():
    request = HttpRequest()
    first = request.get_or_create_file_info("upload", "a.txt")
    first.grow_file_size(10)
    second = request.get_or_create_file_info("upload", "a.txt")
    assert second is first
    assert request.files == {"upload": {"a.txt": FileInfo(file_size=10)}}


def test_remove_uploaded_files(tmp_path):
    stored = tmp_path / "stored"
    stored.write_bytes(b"data")
    request = HttpRequest()
    request.get_or_create_file_info("f", "a.txt").file_system_file_name = str(stored)
    request.get_or_create_file_info("f", "gone.txt").file_system_file_name = str(tmp_path / "none")
    request.remove_uploaded_files()
    assert not stored.exists()


def test_context_manager_removes_uploads(tmp_path):
    stored = tmp_path / "stored"
    stored.write_bytes(b"data")
    with HttpRequest() as request:
        request.get_or_create_file_info("f", "a.txt").file_system_file_name = str(stored)
        assert stored.exists()
    assert not stored.exists()


@pytest.mark.parametrize("method", ["get", "Get", "GET"])
def test_str_first_line(method):
    password = "password"
    request = HttpRequest(method=method, path="/base", user="user", password=password)
    first_line = str(request).splitlines()[0]
    assert first_line == 'GET Request [user:"user" pass:"password"] path:"/base"'


def test_str_lists_parts_and_version_line():
    request = HttpRequest(
        path="/base",
        version="HTTP/1.1",
        headers={"Host": "localhost"},
        query_args=[("a", "1")],
        requestor="127.0.0.1",
        requestor_port=8080,
    )
    lines = str(request).splitlines()
    assert '    Headers [Host:"localhost" ]' in lines
    assert '    Query Args [a:["1"] ]' in lines
    assert lines[-1] == "    Version [ HTTP/1.1 ] Requestor [ 127.0.0.1 ] Port [ 8080 ]"
    assert not any(line.startswith("    Footers") for line in lines)