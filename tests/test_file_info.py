import pytest

from httpserve.file_info import FileInfo


def test_defaults_are_empty():
    info = FileInfo()
    assert info.file_size == 0
    assert info.file_system_file_name == ""
    assert info.content_type == ""
    assert info.transfer_encoding == ""


def test_grow_accumulates():
    info = FileInfo()
    info.grow_file_size(10)
    info.grow_file_size(5)
    assert info.file_size == 15


def test_grow_by_zero_keeps_size():
    info = FileInfo(file_size=7)
    info.grow_file_size(0)
    assert info.file_size == 7


def test_negative_growth_rejected():
    info = FileInfo()
    with pytest.raises(ValueError):
        info.grow_file_size(-1)


def test_fields_are_settable():
    info = FileInfo()
    info.file_system_file_name = "/tmp/upload"
    info.content_type = "text/plain"
    info.transfer_encoding = "binary"
    assert info == FileInfo("/tmp/upload", "text/plain", "binary", 0)