"""Tests for sail module."""

import subprocess
from unittest.mock import patch

import pytest

from sailinit.sail import (
    SailCommandError,
    SailNotFoundError,
    container_status,
    detect_php_version,
    install_dependencies,
    run_sail,
)


@pytest.fixture
def sail_project(project_dir):
    """Project directory with a vendor/bin/sail launcher."""
    sail = project_dir / "vendor" / "bin" / "sail"
    sail.parent.mkdir(parents=True)
    sail.write_text("#!/bin/sh\n")
    sail.chmod(0o755)
    return project_dir


@pytest.mark.parametrize(
    "compose, expected",
    [
        ("context: ./vendor/laravel/sail/runtimes/8.3\n", "83"),
        ("image: sail-8.4/app\n", "84"),
        ("context: ./docker/8.2\n", "82"),
        ("image: mysql/mysql-server:8.0\n", None),
    ],
)
def test_detect_php_version(project_dir, compose, expected):
    """Test PHP version detection from compose files."""
    (project_dir / "compose.yaml").write_text(compose)

    assert detect_php_version(project_dir) == expected


def test_detect_php_version_docker_compose_name(project_dir):
    """Test detection falls through to docker-compose.yml."""
    (project_dir / "docker-compose.yml").write_text("image: sail-8.1/app\n")

    assert detect_php_version(project_dir) == "81"


def test_detect_php_version_no_compose(project_dir):
    """Test detection without any compose file."""
    assert detect_php_version(project_dir) is None


def test_install_dependencies_skips_when_sail_exists(sail_project):
    """Test composer install is skipped if sail is already installed."""
    with patch("sailinit.sail.subprocess.run") as mock_run:
        assert install_dependencies(sail_project, "84") is False
        mock_run.assert_not_called()


def test_install_dependencies_runs_docker(project_dir):
    """Test the docker command used for composer install."""
    with patch("sailinit.sail.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess([], 0)

        assert install_dependencies(project_dir, "83") is True

    cmd = mock_run.call_args.args[0]
    assert cmd[:3] == ["docker", "run", "--rm"]
    assert "laravelsail/php83-composer:latest" in cmd
    assert f"{project_dir.resolve()}:/var/www/html" in cmd
    assert cmd[-3:] == ["composer", "install", "--ignore-platform-reqs"]


def test_install_dependencies_force(sail_project):
    """Test --fresh reinstalls even with sail present."""
    with patch("sailinit.sail.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess([], 0)

        assert install_dependencies(sail_project, "84", force=True) is True
        mock_run.assert_called_once()


def test_install_dependencies_failure(project_dir):
    """Test a failing docker run raises SailCommandError."""
    with patch("sailinit.sail.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess([], 1)

        with pytest.raises(SailCommandError):
            install_dependencies(project_dir, "84")


def test_install_dependencies_without_docker(project_dir):
    """Test a missing docker binary raises SailCommandError."""
    with patch("sailinit.sail.subprocess.run", side_effect=FileNotFoundError("docker")):
        with pytest.raises(SailCommandError):
            install_dependencies(project_dir, "84")


def test_run_sail_missing(project_dir):
    """Test running sail in a project without it."""
    with pytest.raises(SailNotFoundError):
        run_sail(project_dir, "up", "-d")


def test_run_sail(sail_project):
    """Test sail is invoked with the given arguments."""
    with patch("sailinit.sail.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess([], 0)

        run_sail(sail_project, "up", "-d")

    cmd = mock_run.call_args.args[0]
    assert cmd == [str(sail_project / "vendor" / "bin" / "sail"), "up", "-d"]


def test_container_status_no_sail(project_dir):
    """Test status of a project without a sail launcher."""
    assert container_status(project_dir) is None


def test_container_status_counts_running(sail_project):
    """Test counting running containers."""
    with patch("sailinit.sail.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess(
            [], 0, stdout="running\nexited\nrunning\n"
        )

        assert container_status(sail_project) == 2


def test_container_status_failure(sail_project):
    """Test a failing sail ps raises SailCommandError."""
    with patch("sailinit.sail.subprocess.run") as mock_run:
        mock_run.return_value = subprocess.CompletedProcess([], 1, stdout="")

        with pytest.raises(SailCommandError):
            container_status(sail_project)
