# tests/test_cli.py
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from eas_offchain.cli.main import app
from eas_offchain.codec.share import decode_from_text, encode_to_text
from eas_offchain.core.types import AttestationShareablePackage

runner = CliRunner()


@pytest.fixture
def package_file(tmp_path: Path, v2_package) -> Path:
    path = tmp_path / "package.json"
    path.write_text(json.dumps(v2_package.to_dict()), encoding="utf-8")
    return path


@pytest.fixture
def flat_package_file(tmp_path: Path, flat_v1_package) -> Path:
    path = tmp_path / "flat.json"
    path.write_text(json.dumps(flat_v1_package.to_dict()), encoding="utf-8")
    return path


def test_encode(package_file: Path, v2_package):
    result = runner.invoke(app, ["encode", str(package_file)])
    assert result.exit_code == 0
    assert result.stdout.strip() == encode_to_text(v2_package)


def test_encode_flat_package(flat_package_file: Path):
    result = runner.invoke(app, ["encode", str(flat_package_file)])
    assert result.exit_code == 0
    assert decode_from_text(result.stdout.strip()).sig.version == 1


def test_encode_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["encode", str(tmp_path / "nope.json")])
    assert result.exit_code == 1
    assert "not found" in result.stdout.lower()


def test_encode_invalid_json(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    result = runner.invoke(app, ["encode", str(path)])
    assert result.exit_code == 1
    assert "failed to read package" in result.stdout.lower()


def test_url(package_file: Path):
    result = runner.invoke(app, ["url", str(package_file), "--base-url", "https://easscan.org"])
    assert result.exit_code == 0
    assert result.stdout.strip().startswith("https://easscan.org/offchain/url/#attestation=")


def test_decode_to_stdout(v2_package):
    text = encode_to_text(v2_package)
    result = runner.invoke(app, ["decode", "--", text])
    assert result.exit_code == 0
    decoded = AttestationShareablePackage.from_dict(json.loads(result.stdout))
    assert decoded == v2_package


def test_decode_to_file(tmp_path: Path, legacy_package):
    out = tmp_path / "decoded.json"
    result = runner.invoke(app, ["decode", "--output", str(out), "--", encode_to_text(legacy_package)])
    assert result.exit_code == 0
    assert out.exists()
    assert "LEGACY" in result.stdout
    assert AttestationShareablePackage.from_dict(json.loads(out.read_text(encoding="utf-8"))) == legacy_package


def test_decode_garbage():
    result = runner.invoke(app, ["decode", "--", "abcde"])
    assert result.exit_code == 1
    assert "decoding failed" in result.stdout.lower()


def test_inspect(v2_package):
    result = runner.invoke(app, ["inspect", "--", encode_to_text(v2_package)])
    assert result.exit_code == 0
    assert "VERSION2" in result.stdout
    assert "reserved" in result.stdout
    assert "message.salt" in result.stdout


def test_verbose_flag(v1_package):
    result = runner.invoke(app, ["--verbose", "decode", "--", encode_to_text(v1_package)])
    assert result.exit_code == 0


@pytest.mark.parametrize("command", ["encode", "url"])
def test_invalid_compression_level_env(package_file: Path, monkeypatch, command):
    monkeypatch.setenv("EAS_OFFCHAIN_COMPRESSION_LEVEL", "11")
    result = runner.invoke(app, [command, str(package_file)])
    assert result.exit_code == 1
    assert "encoding failed" in result.stdout.lower()
    assert "EAS_OFFCHAIN_COMPRESSION_LEVEL" in result.stdout
