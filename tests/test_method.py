import pytest

from pluto.method import InvalidMethod, Method


def test_method_eq():
    assert Method.GET == Method.GET
    assert Method.GET == "GET"
    assert "GET" == Method.GET
    assert Method.from_bytes(b"GET") == Method.GET


def test_method_is_case_sensitive():
    lower = Method.parse("get")
    assert lower.as_str() == "get"
    assert (lower == Method.GET) is False
    assert (Method.GET == "get") is False
    assert not lower.is_safe()


@pytest.mark.parametrize("src", [b"", bytes([0xC0]), bytes([0x10]), b"GE T", b"A#B"])
def test_invalid_method_bytes(src):
    with pytest.raises(InvalidMethod):
        Method.from_bytes(src)


def test_invalid_method_empty_str():
    with pytest.raises(InvalidMethod):
        Method.parse("")


def test_invalid_method_is_value_error_with_message():
    with pytest.raises(ValueError, match="invalid HTTP method"):
        Method.parse("NOT VALID")


def test_is_idempotent():
    assert Method.OPTIONS.is_idempotent()
    assert Method.PUT.is_idempotent()
    assert Method.DELETE.is_idempotent()
    assert Method.HEAD.is_idempotent()
    assert Method.TRACE.is_idempotent()

    assert not Method.POST.is_idempotent()
    assert not Method.CONNECT.is_idempotent()
    assert not Method.PATCH.is_idempotent()


def test_is_safe():
    assert Method.GET.is_safe()
    assert Method.HEAD.is_safe()
    assert Method.OPTIONS.is_safe()
    assert Method.TRACE.is_safe()
    assert not Method.PUT.is_safe()
    assert not Method.DELETE.is_safe()
    assert not Method.POST.is_safe()


def test_extension_method():
    assert Method.parse("WOW") == "WOW"
    assert Method.parse("wOw!!") == "wOw!!"

    long_method = "This_is_a_very_long_method.It_is_valid_but_unlikely."
    assert Method.parse(long_method) == long_method


def test_extension_method_not_safe_or_idempotent():
    method = Method.parse("PURGE")
    assert not method.is_safe()
    assert not method.is_idempotent()


def test_as_str_and_str():
    assert Method.POST.as_str() == "POST"
    assert str(Method.OPTIONS) == "OPTIONS"
    assert repr(Method.PATCH) == "Method('PATCH')"


def test_hash_usable_as_dict_key():
    table = {Method.GET: 1}
    assert table[Method.parse("GET")] == 1
    assert hash(Method.GET) == hash("GET")


@pytest.mark.parametrize(
    "name, constant",
    [
        ("GET", Method.GET),
        ("POST", Method.POST),
        ("PUT", Method.PUT),
        ("DELETE", Method.DELETE),
        ("HEAD", Method.HEAD),
        ("OPTIONS", Method.OPTIONS),
        ("CONNECT", Method.CONNECT),
        ("PATCH", Method.PATCH),
        ("TRACE", Method.TRACE),
    ],
)
def test_standard_methods_round_trip(name, constant):
    assert Method.from_bytes(name.encode()) == constant
    assert constant.as_str() == name