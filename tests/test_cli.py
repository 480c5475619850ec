import textwrap

import yaml
from click.testing import CliRunner

from subnetcheck import __version__
from subnetcheck.cli import cli


def _run(*args):
    return CliRunner().invoke(cli, list(args))


def test_version():
    result = _run("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_check_ok(config_file, tmp_path):
    out = tmp_path / "normalized.yml"
    result = _run("check", str(config_file), "-o", str(out))
    assert result.exit_code == 0, result.output
    assert "podman1" in result.output
    data = yaml.safe_load(out.read_text())
    assert data["networks"][0]["subnets"][0]["gateway"] == "10.89.0.1"


def test_check_conflict_with_used(config_file):
    result = _run("check", str(config_file), "--used", "10.89.0.0/16")
    assert result.exit_code == 1
    assert "Error" in result.output


def test_check_invalid_used_option(config_file):
    result = _run("check", str(config_file), "--used", "nope")
    assert result.exit_code == 2


def test_check_overlapping_networks_in_one_file(tmp_path):
    path = tmp_path / "n.yml"
    path.write_text(textwrap.dedent("""\
        networks:
          - name: a
            subnets:
              - subnet: 10.0.0.0/16
          - name: b
            subnets:
              - subnet: 10.0.5.0/24
    """))
    result = _run("check", str(path))
    assert result.exit_code == 1
    assert "10.0.5.0/24" in result.output


def test_check_missing_file(tmp_path):
    result = _run("check", str(tmp_path / "missing.yml"))
    assert result.exit_code == 1


def test_attach_ok(config_file):
    result = _run(
        "attach", str(config_file), "--netns", "/run/netns/c1", "--container-id", "abc",
        "-n", "podman1", "-n", "backend:db0", "--ip", "podman1=10.89.0.50",
    )
    assert result.exit_code == 0, result.output
    assert "valid" in result.output


def test_attach_static_ip_outside(config_file):
    result = _run(
        "attach", str(config_file), "--netns", "/run/netns/c1", "--container-id", "abc",
        "-n", "podman1", "--ip", "podman1=10.99.0.5",
    )
    assert result.exit_code == 1
    assert "10.99.0.5" in result.output


def test_attach_empty_namespace(config_file):
    result = _run("attach", str(config_file), "--container-id", "abc", "-n", "podman1")
    assert result.exit_code == 1
    assert "namespace" in result.output


def test_attach_unknown_network(config_file):
    result = _run(
        "attach", str(config_file), "--netns", "/run/netns/c1", "--container-id", "abc",
        "-n", "nope",
    )
    assert result.exit_code == 1
    assert "nope" in result.output


def test_attach_ip_for_unlisted_network(config_file):
    result = _run(
        "attach", str(config_file), "--netns", "/run/netns/c1", "--container-id", "abc",
        "-n", "podman1", "--ip", "backend=10.90.0.5",
    )
    assert result.exit_code == 1


def test_verbose_enables_debug_logging(config_file):
    import logging

    result = _run("--verbose", "check", str(config_file))
    assert result.exit_code == 0, result.output
    assert logging.getLogger("subnetcheck").level == logging.DEBUG
