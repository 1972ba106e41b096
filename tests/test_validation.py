import pytest

from apps.core.utils import (
    contains_dangerous_content,
    get_client_ip,
    is_valid_email,
    is_valid_phone,
    is_valid_postal_code,
    is_valid_product_name,
    is_valid_transaction_id,
    sanitize_input,
    validate_password,
)


def test_sanitize_input_strips_tags_and_escapes():
    assert sanitize_input("  <b>Hello</b> & 'bye'  ") == "Hello &amp; &#x27;bye&#x27;"
    assert sanitize_input("a/b") == "a&#x2F;b"
    assert sanitize_input(None) == ""
    assert sanitize_input(42) == ""


@pytest.mark.parametrize("value", [
    "<script>alert(1)</script>",
    "javascript:alert(1)",
    '<img src=x onerror="alert(1)">',
    "<iframe src='x'></iframe>",
    "<embed src='x'>",
])
def test_dangerous_content_detected(value):
    assert contains_dangerous_content(value)


def test_plain_text_is_not_dangerous():
    assert not contains_dangerous_content("A lovely watch for everyday wear")
    assert not contains_dangerous_content("")


def test_email():
    assert is_valid_email("ayesha@example.com")
    assert not is_valid_email("ayesha@example")
    assert not is_valid_email("ayesha example.com")
    assert not is_valid_email(None)


@pytest.mark.parametrize("phone", ["03001234567", "+923001234567", "0300-1234567", "0300 1234567", "3001234567"])
def test_valid_pakistan_phone(phone):
    assert is_valid_phone(phone)


@pytest.mark.parametrize("phone", ["02001234567", "0300123456", "+14155550100", "", None, 3001234567])
def test_invalid_phone(phone):
    assert not is_valid_phone(phone)


def test_postal_code():
    assert is_valid_postal_code("44000")
    assert is_valid_postal_code("540000")
    assert not is_valid_postal_code("4400")
    assert not is_valid_postal_code("44A00")
    assert not is_valid_postal_code(44000)
    assert not is_valid_postal_code(None)


def test_transaction_id():
    assert is_valid_transaction_id("TXN12345678")
    assert not is_valid_transaction_id("TX1234")
    assert not is_valid_transaction_id("TXN-12345678")
    assert not is_valid_transaction_id("A" * 21)


def test_product_name():
    assert is_valid_product_name("Chronograph (Steel) - Men's")
    assert not is_valid_product_name("ab")
    assert not is_valid_product_name("Watch <script>")


def test_strong_password():
    result = validate_password("Str0ng!Passw0rd")
    assert result.is_valid
    assert result.errors == []
    assert result.strength == "strong"


def test_weak_password_lists_every_problem():
    result = validate_password("abc")
    assert not result.is_valid
    assert "Password must be at least 8 characters long" in result.errors
    assert "Password must contain at least one uppercase letter" in result.errors
    assert "Password must contain at least one number" in result.errors
    assert "Password must contain at least one special character" in result.errors
    assert result.strength == "weak"


def test_medium_password_strength():
    result = validate_password("abcdefgH1")
    assert not result.is_valid
    assert result.strength == "medium"


def test_missing_password():
    result = validate_password("")
    assert result.errors == ["Password is required"]


def test_client_ip_prefers_forwarded_header(rf):
    request = rf.get("/", HTTP_X_FORWARDED_FOR="203.0.113.7, 10.0.0.1", REMOTE_ADDR="10.0.0.2")
    assert get_client_ip(request) == "203.0.113.7"

    request = rf.get("/", REMOTE_ADDR="10.0.0.2")
    assert get_client_ip(request) == "10.0.0.2"
