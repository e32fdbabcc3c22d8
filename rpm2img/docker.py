# SPDX-License-Identifier: BUSL-1.1
"""Docker operations: build, run, commit and tag images, query state."""

import os
import shlex
import subprocess
from pathlib import Path
from typing import Optional

from rpm2img.config.resources import WorkflowSettings


# Files the factory image build needs in the build directory
BUILD_INPUTS = (
    "Dockerfile",
    "ibm-datapower-common.rpm",
    "ibm-datapower-image.rpm",
)


def _echo(cmd: list):
    print(shlex.join(str(c) for c in cmd))


def _run(cmd: list, **kwargs) -> Optional[subprocess.CompletedProcess]:
    """Run a docker command. Returns None when docker is not installed."""
    _echo(cmd)
    try:
        return subprocess.run(cmd, **kwargs)
    except FileNotFoundError:
        print("Error: docker not found. Install Docker or add it to PATH.")
        return None


def _succeeded(result) -> bool:
    return result is not None and result.returncode == 0


# ── State queries ────────────────────────────────────────────────────────

def is_container_running(name: str) -> bool:
    """True if the workflow container is up. Missing docker counts as not running."""
    try:
        result = subprocess.run(
            ["docker", "ps", "-q", "--filter", f"name=^{name}$"],
            capture_output=True, text=True
        )
        return bool(result.stdout.strip())
    except FileNotFoundError:
        return False


def container_exists(name: str) -> bool:
    """Check if a container with the given name exists, running or not."""
    try:
        result = subprocess.run(
            ["docker", "ps", "-aq", "--filter", f"name=^{name}$"],
            capture_output=True, text=True
        )
        return bool(result.stdout.strip())
    except FileNotFoundError:
        return False


def image_exists(image: str) -> bool:
    """Check if a Docker image exists locally."""
    try:
        result = subprocess.run(
            ["docker", "image", "inspect", image],
            capture_output=True, text=True
        )
        return result.returncode == 0
    except FileNotFoundError:
        return False


def netstat_listeners(name: str) -> Optional[str]:
    """Return ``netstat -ln`` output from inside a container, or None on failure."""
    try:
        result = subprocess.run(
            ["docker", "exec", name, "netstat", "-ln"],
            capture_output=True, text=True
        )
    except FileNotFoundError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout


def published_host_port(name: str, port: int) -> str:
    """Return the host port published for a container's TCP port, or ""."""
    template = (
        "{{(index (index .NetworkSettings.Ports "
        f'"{port}/tcp"'
        ") 0).HostPort}}"
    )
    try:
        result = subprocess.run(
            ["docker", "inspect", f"--format={template}", name],
            capture_output=True, text=True
        )
    except FileNotFoundError:
        return ""
    if result.returncode != 0:
        return ""
    return result.stdout.strip()


# ── Build ────────────────────────────────────────────────────────────────

def missing_build_inputs(build_dir) -> list:
    """Return the names of required build files absent from ``build_dir``."""
    path = Path(build_dir)
    return [name for name in BUILD_INPUTS if not (path / name).is_file()]


def build_command(settings: WorkflowSettings) -> list:
    """Return the docker build command for the factory image."""
    cmd = ["docker", "build", "--pull"]
    if settings.http_proxy:
        cmd.extend(["--build-arg", f"http_proxy={settings.http_proxy}"])
        cmd.extend(["--build-arg", f"https_proxy={settings.http_proxy}"])
    cmd.extend(["-t", settings.factory_image, str(settings.build_dir)])
    return cmd


def build_image(settings: WorkflowSettings) -> bool:
    """Build the factory image from the build directory."""
    return _succeeded(_run(build_command(settings)))


# ── Container lifecycle ──────────────────────────────────────────────────

def run_command(settings: WorkflowSettings, image: str) -> list:
    """Return the detached docker run command for ``image``."""
    return [
        "docker", "run", "-d",
        "--name", settings.container_name,
        *settings.run_flags,
        image,
    ]


def run_container(settings: WorkflowSettings, image: str) -> bool:
    """Start ``image`` detached under the configured container name."""
    return _succeeded(_run(run_command(settings, image)))


def exec_shell(name: str):
    """Exec an interactive bash shell in a container, replacing this process."""
    cmd = ["docker", "exec", "-it", name, "/bin/bash"]
    _echo(cmd)
    os.execvp("docker", cmd)


def exec_interactive(name: str, command: list) -> int:
    """Run an interactive command in a container and return its exit status."""
    result = _run(["docker", "exec", "-it", name, *command])
    if result is None:
        return 127
    return result.returncode


def stop_container(name: str, timeout: int) -> bool:
    """Stop a container, giving it ``timeout`` seconds to shut down."""
    return _succeeded(_run(["docker", "stop", "-t", str(timeout), name]))


def remove_container(name: str) -> bool:
    return _succeeded(_run(["docker", "rm", name]))


def container_logs(name: str) -> bool:
    """Print a container's logs with stderr merged into stdout."""
    return _succeeded(_run(["docker", "logs", name], stderr=subprocess.STDOUT))


# ── Images ───────────────────────────────────────────────────────────────

def remove_image(image: str) -> bool:
    """Remove an image, discarding docker's output."""
    return _succeeded(_run(
        ["docker", "rmi", image],
        stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL,
    ))


def commit_container(name: str, image: str) -> bool:
    """Create ``image`` from the current state of a container."""
    return _succeeded(_run(["docker", "commit", name, image]))


def tag_image(source: str, target: str) -> bool:
    return _succeeded(_run(["docker", "tag", source, target]))
