import pytest

from pytotp import OTPConfig, parse_otp_config
from pytotp.exceptions import FormatError, MissingSecretError, OTPError

EXAMPLE = "otpauth://totp/Example?secret=JBSWY3DPEHPK3PXP"


def test_parse_defaults():
    config = parse_otp_config(EXAMPLE)
    assert config.type == "totp"
    assert config.issuer == "Example"
    assert config.secret == "JBSWY3DPEHPK3PXP"
    assert config.algorithm == "SHA1"
    assert config.digits == 6
    assert config.period == 30
    assert config.counter == 0


def test_minimal_uri():
    assert str(parse_otp_config(EXAMPLE)) == EXAMPLE
    assert parse_otp_config(EXAMPLE).to_uri() == EXAMPLE


def test_parse_all_parameters():
    uri = "otpauth://totp/ACME?secret=JBSWY3DPEHPK3PXP&algorithm=SHA256&digits=8&period=60"
    config = parse_otp_config(uri)
    assert config == OTPConfig("totp", "ACME", "JBSWY3DPEHPK3PXP", "SHA256", 8, 60, 0)
    assert config.to_uri() == uri


def test_parse_hotp():
    uri = "otpauth://hotp/ACME?secret=JBSWY3DPEHPK3PXP&counter=42"
    config = parse_otp_config(uri)
    assert config.type == "hotp"
    assert config.counter == 42
    assert str(config) == uri


def test_parameter_order():
    config = OTPConfig("hotp", None, "ABC", algorithm="SHA512", digits=7, period=45, counter=3)
    assert config.to_uri() == "otpauth://hotp/?secret=ABC&algorithm=SHA512&digits=7&counter=3&period=45"


def test_no_issuer():
    config = parse_otp_config("otpauth://totp/?secret=ABC")
    assert config.issuer is None
    assert config.to_uri() == "otpauth://totp/?secret=ABC"


def test_issuer_follows_delimiters():
    assert parse_otp_config("otpauth://hotp2/Acme?secret=ABC").issuer == "Acme"
    assert parse_otp_config("otpauth://x/Longer Name?secret=ABC").issuer == "Longer Name"
    assert parse_otp_config("otpauth://totp/Example:alice@example.com?secret=ABC").issuer == "Example:alice@example.com"


def test_issuer_is_not_encoded():
    config = OTPConfig("totp", "Big Corp", "ABC")
    assert config.to_uri() == "otpauth://totp/Big Corp?secret=ABC"
    assert parse_otp_config(config.to_uri()).issuer == "Big Corp"


def test_secret_and_type_are_encoded():
    config = OTPConfig("my type", None, "A B&C", algorithm="SHA 1")
    uri = config.to_uri()
    assert uri == "otpauth://my%20type/?secret=A%20B%26C&algorithm=SHA%201"
    assert parse_otp_config(uri) == config


@pytest.mark.parametrize(
    "query,period,digits",
    [
        ("period=5", 10, 6),
        ("period=500", 120, 6),
        ("period=-1", 10, 6),
        ("digits=25", 30, 20),
        ("digits=4", 30, 6),
        ("digits=20&period=120", 120, 20),
        ("digits=+8&period=10", 10, 8),
    ],
)
def test_clamping(query, period, digits):
    config = parse_otp_config("otpauth://totp/X?secret=ABC&" + query)
    assert config.period == period
    assert config.digits == digits


def test_construction_does_not_clamp():
    config = OTPConfig("totp", None, "ABC", digits=4, period=5)
    assert config.digits == 4
    assert config.to_uri() == "otpauth://totp/?secret=ABC&digits=4&period=5"
    assert parse_otp_config(config.to_uri()).digits == 6


def test_duplicate_keys_last_wins():
    assert parse_otp_config("otpauth://totp/X?secret=AAA&secret=BBB").secret == "BBB"


def test_value_split_on_first_equals():
    assert parse_otp_config("otpauth://totp/X?secret=ABC=").secret == "ABC="


def test_key_without_value():
    config = parse_otp_config("otpauth://totp/X?secret=ABC&flag&&digits=8")
    assert config.secret == "ABC"
    assert config.digits == 8


@pytest.mark.parametrize(
    "uri",
    [
        "http://totp/X?secret=ABC",
        "OTPAUTH://totp/X?secret=ABC",
        "otpauth://totp",
        "otpauth://totp/Example",
        "otpauth://totp/X?secret=ABC&digits=eight",
        "otpauth://totp/X?secret=ABC&period=",
        "otpauth://totp/X?secret=ABC&counter=1.5",
        "otpauth://totp/X?secret=ABC&digits= 8",
    ],
)
def test_format_errors(uri):
    with pytest.raises(FormatError):
        parse_otp_config(uri)


@pytest.mark.parametrize(
    "uri",
    [
        "otpauth://totp/X?digits=8",
        "otpauth://totp/X?",
        "otpauth://totp/X?secret",
        "otpauth://totp/X?secret=",
    ],
)
def test_missing_secret(uri):
    with pytest.raises(MissingSecretError):
        parse_otp_config(uri)


def test_error_hierarchy():
    with pytest.raises(ValueError):
        parse_otp_config("otpauth://totp/X?digits=8")
    assert issubclass(MissingSecretError, FormatError)
    assert issubclass(FormatError, OTPError)


def test_config_is_immutable():
    config = parse_otp_config(EXAMPLE)
    with pytest.raises(AttributeError):
        config.digits = 8
    assert config == parse_otp_config(EXAMPLE)
    assert config is not parse_otp_config(EXAMPLE)


def test_parse_classmethod():
    assert OTPConfig.parse(EXAMPLE) == parse_otp_config(EXAMPLE)


def test_free_form_type():
    config = parse_otp_config("otpauth://TOTP/X?secret=ABC")
    assert config.type == "TOTP"


@pytest.mark.parametrize(
    "query",
    [
        "counter=18446744073709551616",
        "counter=9223372036854775808",
        "counter=-9223372036854775809",
        "digits=99999999999999999999",
        "period=-99999999999999999999",
    ],
)
def test_integer_out_of_range(query):
    with pytest.raises(FormatError, match="out of range"):
        parse_otp_config("otpauth://hotp/X?secret=ABC&" + query)


def test_integer_range_limits():
    assert parse_otp_config("otpauth://hotp/X?secret=ABC&counter=9223372036854775807").counter == 2**63 - 1
    assert parse_otp_config("otpauth://hotp/X?secret=ABC&counter=-9223372036854775808").counter == -(2**63)
