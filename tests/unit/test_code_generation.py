from taskmart.domain.services import (
    OTP_ALPHABET,
    generate_otp_code,
    is_valid_email,
    is_valid_otp_format,
    normalize_identity,
    secure_compare,
)


def test_code_is_5_chars_from_alphabet_and_randomish():
    seen = set()
    for _ in range(200):
        c = generate_otp_code()
        assert len(c) == 5, c
        assert all(ch in OTP_ALPHABET for ch in c), c
        seen.add(c)
    # not a strict randomness test, but should produce some variety
    assert len(seen) > 150


def test_generated_codes_pass_format_check():
    for _ in range(50):
        assert is_valid_otp_format(generate_otp_code())


def test_otp_format_is_case_insensitive_and_strict():
    assert is_valid_otp_format("A1B2C")
    assert is_valid_otp_format("a1b2c")
    assert not is_valid_otp_format("A1B2")
    assert not is_valid_otp_format("A1B2C3")
    assert not is_valid_otp_format("A1-2C")
    assert not is_valid_otp_format(" A1B2")
    assert not is_valid_otp_format("")


def test_normalize_identity():
    assert normalize_identity("  User@Example.COM ") == "user@example.com"


def test_email_format():
    assert is_valid_email("user@example.com")
    assert is_valid_email("ghost@nowhere.test")
    assert not is_valid_email("user@example")
    assert not is_valid_email("user example@x.com")
    assert not is_valid_email("@example.com")


def test_secure_compare_behavior():
    assert secure_compare("A1B2C", "A1B2C") is True
    assert secure_compare("A1B2C", "A1B2D") is False
    assert secure_compare("", "") is True
    assert secure_compare("a", "") is False
    assert secure_compare("é", "é") is True
