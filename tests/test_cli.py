"""Tests for the command-line interface."""

import pytest

from basic_otp.cli import main


RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"  # Base32 encoded "12345678901234567890"
TEST_SECRET = "KRCVGVA"  # Base32 encoded "TEST"


def test_no_command(capsys):
    """Test that running without a command prints help."""
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_hotp_generate(capsys):
    """Test generating a counter-based code."""
    assert main(["hotp", "--secret", RFC_SECRET, "--counter", "1"]) == 0
    assert capsys.readouterr().out.strip() == "287082"


def test_hotp_alias_and_digits(capsys):
    """Test the short alias with an 8 digit code."""
    assert main(["h", "-s", RFC_SECRET, "-d", "8"]) == 0
    assert capsys.readouterr().out.strip() == "84755224"


def test_hotp_verify(capsys):
    """Test verifying a code within the look-ahead window."""
    args = ["hotp", "-s", RFC_SECRET, "--window", "3", "--verify", "969429"]
    assert main(args) == 0
    assert "next counter: 4" in capsys.readouterr().out


def test_hotp_verify_invalid(capsys):
    """Test verifying a wrong code."""
    assert main(["hotp", "-s", RFC_SECRET, "--verify", "969429"]) == 1
    assert "Invalid code" in capsys.readouterr().err


def test_hotp_negative_counter(capsys):
    """Test that a negative counter is reported as an error."""
    assert main(["hotp", "-s", RFC_SECRET, "--counter", "-1"]) == 1
    assert "must not be negative" in capsys.readouterr().err


def test_invalid_secret(capsys):
    """Test that an undecodable secret is reported as an error."""
    assert main(["hotp", "-s", "not-a-valid-secret"]) == 1
    assert "Unable to decode" in capsys.readouterr().err


@pytest.mark.parametrize(
    "algorithm, expected", [("SHA256", "0133"), ("SHA512", "4442"), ("SHA1", "8253")]
)
def test_totp_generate_at(algorithm, expected, capsys):
    """Test generating a time-based code for a fixed timestamp."""
    args = ["totp", "-s", TEST_SECRET, "-d", "4", "-a", algorithm, "--at", "1706984502"]
    assert main(args) == 0
    assert capsys.readouterr().out.strip() == expected


def test_totp_generate_now(capsys):
    """Test generating a code for the current time."""
    assert main(["t", "-s", TEST_SECRET]) == 0
    code = capsys.readouterr().out.strip()
    assert len(code) == 6
    assert code.isdigit()


def test_totp_verify(capsys):
    """Test verifying a time-based code."""
    args = ["totp", "-s", TEST_SECRET, "-d", "4", "-a", "SHA256", "--at", "1706984502"]
    assert main(args + ["--verify", "0133"]) == 0
    assert "Valid code" in capsys.readouterr().out

    assert main(args + ["--verify", "1183"]) == 1
    assert "Invalid code" in capsys.readouterr().err

    # 1183 belongs to a step three steps later
    assert main(args + ["--verify", "1183", "--window", "3"]) == 0


def test_totp_negative_timestamp(capsys):
    """Test that a negative timestamp is reported as an error."""
    assert main(["totp", "-s", TEST_SECRET, "--at", "-5"]) == 1
    assert "must not be negative" in capsys.readouterr().err


def test_uri_totp(capsys):
    """Test printing a TOTP provisioning URI."""
    args = ["uri", "-s", "JBSWY3DPEE", "-d", "4"]
    args += ["-l", "TEST:alice@google.com", "-i", "Example"]
    assert main(args) == 0
    assert capsys.readouterr().out.strip() == (
        "otpauth://totp/TEST:alice@google.com?secret=JBSWY3DPEE"
        "&issuer=Example&algorithm=SHA1&digits=4"
    )


def test_uri_hotp(capsys):
    """Test printing an HOTP provisioning URI."""
    args = ["uri", "--type", "hotp", "-s", "JBSWY3DPEE", "-d", "4", "-c", "12"]
    args += ["-l", "TEST:alice@google.com", "-i", "Example"]
    assert main(args) == 0
    assert capsys.readouterr().out.strip().endswith("&digits=4&counter=12")
