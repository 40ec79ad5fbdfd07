import base64
import zlib
from collections.abc import Iterator
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from xpub_principals.cli import cli
from xpub_principals.exceptions import DerivationError
from xpub_principals.tests.constants import (
    GENERATOR_PRINCIPAL,
    PRINCIPALS_VECTOR_1,
    PRINCIPALS_VECTOR_2,
    XPRV_VECTOR_1,
    XPUB_VECTOR_1,
    XPUB_VECTOR_2,
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_generate_prints_one_principal_per_line(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", "--xpub", XPUB_VECTOR_2, "-n", "3"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == PRINCIPALS_VECTOR_2
    assert result.stderr == ""


def test_generate_defaults_to_eight_principals(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", "--xpub", XPUB_VECTOR_1])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert len(lines) == 8
    assert lines[:3] == PRINCIPALS_VECTOR_1


def test_generate_zero_count_prints_nothing(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", "--xpub", XPUB_VECTOR_1, "--count", "0"])

    assert result.exit_code == 0
    assert result.stdout == ""


def test_generate_parallel_matches_sequential(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", "--xpub", XPUB_VECTOR_2, "-n", "3", "--parallel"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == PRINCIPALS_VECTOR_2


def test_generate_requires_xpub(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate"])

    assert result.exit_code != 0
    assert "--xpub" in result.stderr


def test_generate_rejects_negative_count(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", "--xpub", XPUB_VECTOR_1, "-n", "-1"])

    assert result.exit_code != 0
    assert result.stdout == ""


def test_generate_reports_invalid_key(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", "--xpub", "xpub-garbage"])

    assert result.exit_code == 1
    assert result.stdout == ""
    assert result.stderr.startswith("Error: Invalid extended public key")
    assert len(result.stderr.splitlines()) == 1


def test_generate_reports_private_key(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["generate", "--xpub", XPRV_VECTOR_1])

    assert result.exit_code == 1
    assert "Extended key is private" in result.stderr


def test_generate_flushes_completed_lines_before_error(runner: CliRunner) -> None:
    def _iter(xpub: str, count: int) -> Iterator[str]:
        yield GENERATOR_PRINCIPAL
        raise DerivationError("Failed to derive child key", index=1)

    generator = Mock()
    generator.iter_principals.side_effect = _iter
    with patch("xpub_principals.cli.PrincipalGenerator", return_value=generator):
        result = runner.invoke(cli, ["generate", "--xpub", XPUB_VECTOR_1, "-n", "2"])

    assert result.exit_code == 1
    assert result.stdout.splitlines() == [GENERATOR_PRINCIPAL]
    assert result.stderr.strip() == "Error: Failed to derive child key (index=1)"


def test_verbose_logs_to_stderr_only(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--verbose", "generate", "--xpub", XPUB_VECTOR_2, "-n", "1"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == PRINCIPALS_VECTOR_2[:1]
    assert "Derived principal" in result.stderr


def test_check_accepts_valid_principals(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["check", *PRINCIPALS_VECTOR_1])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [f"{p}: ok" for p in PRINCIPALS_VECTOR_1]


def test_check_reports_checksum_mismatch(runner: CliRunner) -> None:
    tampered = "vh5jk" + GENERATOR_PRINCIPAL[5:]

    result = runner.invoke(cli, ["check", GENERATOR_PRINCIPAL, tampered])

    assert result.exit_code == 1
    lines = result.stdout.splitlines()
    assert lines[0] == f"{GENERATOR_PRINCIPAL}: ok"
    assert lines[1].startswith(f"{tampered}: Principal checksum mismatch")


def test_check_rejects_non_canonical_spelling(runner: CliRunner) -> None:
    variant = GENERATOR_PRINCIPAL[:-1] + "f"

    result = runner.invoke(cli, ["check", variant])

    assert result.exit_code == 1
    assert result.stdout.startswith(f"{variant}: Principal is not canonical base32")


def test_check_rejects_short_self_authenticating_principal(runner: CliRunner) -> None:
    payload = bytes(3) + b"\x02"
    data = zlib.crc32(payload).to_bytes(4, "big") + payload
    short = base64.b32encode(data).decode("ascii").rstrip("=").lower()

    result = runner.invoke(cli, ["check", short])

    assert result.exit_code == 1
    assert "wrong digest size" in result.stdout
    assert ": ok" not in result.stdout


def test_check_requires_an_argument(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["check"])

    assert result.exit_code != 0
