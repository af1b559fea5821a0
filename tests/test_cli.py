import functools

import pytest
from click.testing import CliRunner

from binfetch import cli
from binfetch.core.runner import Runner

from conftest import tar_gz_bytes

PACKAGES_YAML = r"""
packages:
  - name: hello
    url: https://src.test/hello
    download_url:
      mac: https://dl.test/hello/%v/hello-darwin.tar.gz
      linux: https://dl.test/hello/%v/hello-linux.tar.gz
    version:
      command: [binfetch-test-missing-hello]
      format: 'hello (v[\d.]+)'
  - name: gone
    url: https://src.test/gone
    download_url:
      mac: https://dl.test/gone/%n/gone
      linux: https://dl.test/gone/%n/gone
    version:
      command: [binfetch-test-missing-gone]
      format: '(.*)'
"""


@pytest.fixture
def packages_file(tmp_path):
    path = tmp_path / "packages.yml"
    path.write_text(PACKAGES_YAML)
    return path


@pytest.fixture
def fake_runner(monkeypatch, releases):
    monkeypatch.setattr(cli, "Runner", functools.partial(Runner, transport=releases.transport))
    return releases


@pytest.mark.parametrize("args", [[], ["-h"], ["--help"]])
def test_usage_exits_1(args):
    result = CliRunner().invoke(cli.main, args)

    assert result.exit_code == 1
    assert "PACKAGES_FILE" in result.output


def test_version_option():
    result = CliRunner().invoke(cli.main, ["--version"])
    assert result.exit_code == 0
    assert "binfetch" in result.output


def test_home_not_set(monkeypatch, packages_file):
    monkeypatch.delenv("HOME", raising=False)

    result = CliRunner().invoke(cli.main, [str(packages_file)])

    assert result.exit_code == 1
    assert "HOME is not set" in result.output


def test_bin_dir_defaults_to_home(monkeypatch, tmp_path, fake_runner):
    monkeypatch.setenv("HOME", str(tmp_path))
    path = tmp_path / "packages.yml"
    path.write_text("packages: []\n")

    result = CliRunner().invoke(cli.main, [str(path)])

    assert result.exit_code == 0
    assert (tmp_path / "bin").is_dir()


def test_bad_packages_file(tmp_path):
    path = tmp_path / "packages.yml"
    path.write_text("packages: [\n")

    result = CliRunner().invoke(cli.main, [str(path), "--bin-dir", str(tmp_path / "bin")])

    assert result.exit_code == 1
    assert "invalid YAML" in result.output


def test_reports_failed_packages(tmp_path, packages_file, fake_runner):
    fake_runner.latest["hello"] = "v1.2.0"
    for os_name in ("darwin", "linux"):
        url = f"https://dl.test/hello/v1.2.0/hello-{os_name}.tar.gz"
        fake_runner.assets[url] = tar_gz_bytes({"hello": b"#!/bin/sh\n"})
    bin_dir = tmp_path / "bin"

    result = CliRunner().invoke(cli.main, [str(packages_file), "--bin-dir", str(bin_dir), "-j", "2"])

    assert result.exit_code == 1
    assert "failed to install gone" in result.output
    assert (bin_dir / "hello").read_bytes() == b"#!/bin/sh\n"


def test_all_installed_exits_0(tmp_path, fake_runner):
    path = tmp_path / "packages.yml"
    path.write_text(PACKAGES_YAML.split("  - name: gone")[0])
    fake_runner.latest["hello"] = "v1.2.0"
    for os_name in ("darwin", "linux"):
        url = f"https://dl.test/hello/v1.2.0/hello-{os_name}.tar.gz"
        fake_runner.assets[url] = tar_gz_bytes({"hello": b"binary"})

    result = CliRunner().invoke(cli.main, [str(path), "--bin-dir", str(tmp_path / "bin")])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "bin" / "hello").exists()
